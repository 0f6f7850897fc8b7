import io

import pytest
from openpyxl import Workbook, load_workbook

from destaque_sheq.models import Colaborador, TipoColaborador
from destaque_sheq.services.importacao_service import importacao_service, ImportacaoError, COLUNAS

from conftest import API, criar_colaborador

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _planilha(linhas, cabecalho=COLUNAS) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.append(cabecalho)
    for linha in linhas:
        ws.append(linha)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


# ============ CRUD ============

def test_criar_terceirizado_exige_empresa(client, admin_headers):
    resp = client.post(f"{API}/colaboradores", json={
        "nome": "Maria", "departamento": "RH", "tipo": "terceirizado",
    }, headers=admin_headers)
    assert resp.status_code == 422

    resp = client.post(f"{API}/colaboradores", json={
        "nome": "Maria", "departamento": "RH", "tipo": "terceirizado", "empresa": " Empresa ABC ",
    }, headers=admin_headers)
    assert resp.status_code == 201
    assert resp.json()["empresa"] == "Empresa ABC"


def test_funcionario_nunca_tem_empresa(client, admin_headers):
    resp = client.post(f"{API}/colaboradores", json={
        "nome": "João", "departamento": "TI", "tipo": "funcionario", "empresa": "Ignorada",
    }, headers=admin_headers)

    assert resp.status_code == 201
    assert resp.json()["empresa"] is None


def test_listar_ordenado_e_filtrado(client, db, gestor_headers):
    criar_colaborador(db, "Zeca")
    criar_colaborador(db, "Ana")
    criar_colaborador(db, "Beto", TipoColaborador.TERCEIRIZADO)

    resp = client.get(f"{API}/colaboradores", headers=gestor_headers)
    assert [c["nome"] for c in resp.json()["items"]] == ["Ana", "Beto", "Zeca"]

    resp = client.get(f"{API}/colaboradores", params={"tipo": "terceirizado"}, headers=gestor_headers)
    assert resp.json()["total"] == 1


def test_atualizar_para_funcionario_remove_empresa(client, db, admin_headers):
    colaborador = criar_colaborador(db, "Beto", TipoColaborador.TERCEIRIZADO)

    resp = client.put(f"{API}/colaboradores/{colaborador.id}", json={"tipo": "funcionario"}, headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["empresa"] is None


def test_atualizar_para_terceirizado_sem_empresa(client, db, admin_headers):
    colaborador = criar_colaborador(db, "Ana")

    resp = client.put(f"{API}/colaboradores/{colaborador.id}", json={"tipo": "terceirizado"}, headers=admin_headers)

    assert resp.status_code == 400


def test_gestor_nao_cria(client, gestor_headers):
    resp = client.post(f"{API}/colaboradores", json={
        "nome": "João", "departamento": "TI", "tipo": "funcionario",
    }, headers=gestor_headers)

    assert resp.status_code == 403


def test_excluir(client, db, admin_headers):
    colaborador = criar_colaborador(db, "Ana")

    assert client.delete(f"{API}/colaboradores/{colaborador.id}", headers=admin_headers).status_code == 204
    assert client.get(f"{API}/colaboradores/{colaborador.id}", headers=admin_headers).status_code == 404


# ============ IMPORTAÇÃO ============

class TestImportacaoService:
    """Validação e leitura das planilhas de colaboradores."""

    def test_validar_linha_terceirizado_sem_empresa(self):
        linha = importacao_service.validar_linha(
            {"Nome": "Maria", "Departamento": "RH", "Tipo": "terceirizado", "Empresa": ""}, 2
        )

        assert linha["valido"] is False
        assert "Empresa é obrigatória para terceirizados" in linha["erros"]

    def test_validar_linha_normaliza_tipo_e_empresa(self):
        linha = importacao_service.validar_linha(
            {"Nome": " João ", "Departamento": "TI", "Tipo": "FUNCIONARIO", "Empresa": "X"}, 3
        )

        assert linha["valido"] is True
        assert linha["nome"] == "João"
        assert linha["tipo"] == "funcionario"
        assert linha["empresa"] is None

    def test_validar_linha_nome_acima_do_limite(self):
        linha = importacao_service.validar_linha(
            {"Nome": "A" * 201, "Departamento": "TI", "Tipo": "funcionario", "Empresa": ""}, 2
        )

        assert linha["valido"] is False
        assert linha["erros"] == ["Nome deve ter no máximo 200 caracteres"]

    def test_empresa_longa_de_funcionario_e_descartada(self):
        linha = importacao_service.validar_linha(
            {"Nome": "João", "Departamento": "TI", "Tipo": "funcionario", "Empresa": "X" * 300}, 2
        )

        assert linha["valido"] is True
        assert linha["empresa"] is None

    def test_ler_planilha_ignora_linhas_vazias(self):
        conteudo = _planilha([
            ["João Silva", "TI", "funcionario", None],
            [None, None, None, None],
            ["Maria Santos", "RH", "terceirizado", "Empresa ABC"],
            ["", "Operações", "gerente", None],
        ])

        linhas = importacao_service.ler_planilha(conteudo, "colaboradores.xlsx")

        assert [l["linha"] for l in linhas] == [2, 4, 5]
        assert [l["valido"] for l in linhas] == [True, True, False]
        assert len(linhas[2]["erros"]) == 2

    def test_ler_planilha_rejeita_extensao(self):
        with pytest.raises(ImportacaoError):
            importacao_service.ler_planilha(b"nome;tipo", "colaboradores.csv")

    def test_ler_planilha_corrompida(self):
        with pytest.raises(ImportacaoError):
            importacao_service.ler_planilha(b"isto nao e um xlsx", "colaboradores.xlsx")

    def test_ler_planilha_sem_dados(self):
        with pytest.raises(ImportacaoError, match="não contém dados"):
            importacao_service.ler_planilha(_planilha([]), "vazia.xlsx")

    def test_modelo_de_importacao_e_valido(self):
        conteudo = importacao_service.gerar_modelo()

        wb = load_workbook(io.BytesIO(conteudo))
        assert wb.active.title == "Colaboradores"
        assert [c.value for c in wb.active[1]] == COLUNAS

        linhas = importacao_service.ler_planilha(conteudo, "modelo.xlsx")
        assert len(linhas) == 3
        assert all(l["valido"] for l in linhas)


def test_rota_previa_nao_grava(client, db, admin_headers):
    conteudo = _planilha([["João", "TI", "funcionario", None], ["", "TI", "funcionario", None]])

    resp = client.post(
        f"{API}/colaboradores/importar/previa",
        files={"arquivo": ("lote.xlsx", conteudo, XLSX)},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["validos"] == 1
    assert resp.json()["invalidos"] == 1
    assert db.query(Colaborador).count() == 0


def test_rota_importar_grava_apenas_validos(client, db, admin_headers):
    conteudo = _planilha([
        ["João Silva", "TI", "funcionario", "Ignorada"],
        ["Maria Santos", "RH", "terceirizado", "Empresa ABC"],
        ["Pedro", "Operações", "terceirizado", None],
    ])

    resp = client.post(
        f"{API}/colaboradores/importar",
        files={"arquivo": ("lote.xlsx", conteudo, XLSX)},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["importados"] == 2

    colaboradores = {c.nome: c for c in db.query(Colaborador).all()}
    assert set(colaboradores) == {"João Silva", "Maria Santos"}
    assert colaboradores["João Silva"].empresa is None
    assert colaboradores["Maria Santos"].tipo == TipoColaborador.TERCEIRIZADO
    assert colaboradores["Maria Santos"].empresa == "Empresa ABC"


def test_rota_importar_arquivo_invalido(client, admin_headers):
    resp = client.post(
        f"{API}/colaboradores/importar",
        files={"arquivo": ("lote.txt", b"abc", "text/plain")},
        headers=admin_headers,
    )

    assert resp.status_code == 400


def test_rota_modelo(client, admin_headers):
    resp = client.get(f"{API}/colaboradores/importar/modelo", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.headers["content-type"] == XLSX


def test_rota_importar_linha_longa_nao_bloqueia_as_demais(client, db, admin_headers):
    conteudo = _planilha([
        ["A" * 201, "TI", "funcionario", None],
        ["Maria Santos", "RH", "terceirizado", "E" * 201],
        ["João Silva", "TI", "funcionario", None],
    ])

    resp = client.post(
        f"{API}/colaboradores/importar",
        files={"arquivo": ("lote.xlsx", conteudo, XLSX)},
        headers=admin_headers,
    )

    assert resp.status_code == 200
    assert resp.json()["importados"] == 1
    assert resp.json()["invalidos"] == 2
    assert [c.nome for c in db.query(Colaborador).all()] == ["João Silva"]
