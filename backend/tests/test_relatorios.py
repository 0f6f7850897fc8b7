import io

from openpyxl import load_workbook

from destaque_sheq.models import Voto, TipoColaborador
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.services.relatorio_service import relatorio_service, taxa_participacao

from conftest import API, criar_usuario, criar_colaborador, criar_periodo


def _votar(db, eleitor, colaborador, mes="2024-01", total_sim=8):
    db.add(Voto(
        eleitor_id=eleitor.id,
        eleitor_nome=eleitor.nome,
        colaborador_id=colaborador.id,
        colaborador_nome=colaborador.nome,
        colaborador_tipo=colaborador.tipo,
        mes=mes,
        respostas=[True] * total_sim + [False] * (8 - total_sim),
        total_sim=total_sim,
    ))
    db.commit()


def test_taxa_participacao():
    assert taxa_participacao(12, 15) == 80
    assert taxa_participacao(1, 8) == 13
    assert taxa_participacao(1, 3) == 33
    assert taxa_participacao(0, 10) == 0
    assert taxa_participacao(3, 0) == 0


def test_relatorio_mensal(db):
    eleitores = [criar_usuario(db, f"g{i}@odfjell.com") for i in range(4)]
    ana = criar_colaborador(db, "Ana")
    bruno = criar_colaborador(db, "Bruno")
    carla = criar_colaborador(db, "Carla", TipoColaborador.TERCEIRIZADO)

    _votar(db, eleitores[0], ana, total_sim=8)
    _votar(db, eleitores[1], bruno, total_sim=3)
    _votar(db, eleitores[2], bruno, total_sim=2)
    _votar(db, eleitores[0], carla, total_sim=6)

    relatorio = relatorio_service.relatorio_mensal(db, "2024-01")

    assert relatorio["estatisticas"] == {
        "total_votos": 4,
        "total_eleitores": 4,
        "eleitores_votantes": 3,
        "taxa_participacao": 75,
    }
    ranking = relatorio["ranking_funcionarios"]
    assert [(r["posicao"], r["colaborador_nome"]) for r in ranking] == [(1, "Bruno"), (2, "Ana")]
    assert relatorio["ranking_terceirizados"][0]["empresa"] == "Empresa ABC"
    assert relatorio["resultado"] is None


def test_cache_invalidado_por_novos_votos(db):
    eleitor = criar_usuario(db, "g@odfjell.com")
    outro = criar_usuario(db, "h@odfjell.com")
    ana = criar_colaborador(db, "Ana")
    _votar(db, eleitor, ana)

    primeiro = relatorio_service.relatorio_mensal(db, "2024-01")
    assert relatorio_service.relatorio_mensal(db, "2024-01") is primeiro

    _votar(db, outro, ana)
    assert relatorio_service.relatorio_mensal(db, "2024-01") is primeiro

    store_eventos.publicar(EventoDados.VOTOS_ALTERADOS, mes="2024-01")
    atualizado = relatorio_service.relatorio_mensal(db, "2024-01")

    assert atualizado is not primeiro
    assert atualizado["estatisticas"]["total_votos"] == 2


def test_evento_de_outro_mes_mantem_cache(db):
    primeiro = relatorio_service.relatorio_mensal(db, "2024-01")

    store_eventos.publicar(EventoDados.VOTOS_ALTERADOS, mes="2024-02")
    assert relatorio_service.relatorio_mensal(db, "2024-01") is primeiro

    store_eventos.publicar(EventoDados.COLABORADORES_ALTERADOS, colaborador_id=1)
    assert relatorio_service.relatorio_mensal(db, "2024-01") is not primeiro


def test_evento_durante_a_consulta_nao_guarda_relatorio(db, monkeypatch):
    eleitor = criar_usuario(db, "g@odfjell.com")
    outro = criar_usuario(db, "h@odfjell.com")
    ana = criar_colaborador(db, "Ana")
    _votar(db, eleitor, ana)

    estatisticas = relatorio_service.estatisticas

    def estatisticas_com_voto_concorrente(votos, total_eleitores):
        # Voto gravado depois da leitura, antes do relatório entrar no cache
        _votar(db, outro, ana)
        store_eventos.publicar(EventoDados.VOTOS_ALTERADOS, mes="2024-01")
        return estatisticas(votos, total_eleitores)

    monkeypatch.setattr(relatorio_service, "estatisticas", estatisticas_com_voto_concorrente)
    desatualizado = relatorio_service.relatorio_mensal(db, "2024-01")
    monkeypatch.undo()

    assert desatualizado["estatisticas"]["total_votos"] == 1
    assert relatorio_service.relatorio_mensal(db, "2024-01")["estatisticas"]["total_votos"] == 2


def test_historico_participacao(client, db, admin, admin_headers):
    gestor = criar_usuario(db, "g@odfjell.com")
    ana = criar_colaborador(db, "Ana")
    criar_periodo(db, "2024-01", ativo=False, finalizado=True)
    criar_periodo(db, "2024-02", ativo=True)
    _votar(db, gestor, ana, mes="2024-01")

    resp = client.get(f"{API}/relatorios/participacao/historico", headers=admin_headers)

    assert resp.status_code == 200
    items = resp.json()["items"]
    assert [i["mes"] for i in items] == ["2024-02", "2024-01"]
    assert items[1]["eleitores_votantes"] == 1
    assert items[1]["taxa_participacao"] == 50
    assert items[0]["total_votos"] == 0


def test_rota_relatorio_reflete_voto_pela_api(client, db, admin_headers, gestor_headers):
    ana = criar_colaborador(db, "Ana")
    assert client.get(f"{API}/relatorios/2024-01", headers=admin_headers).json()["estatisticas"]["total_votos"] == 0

    client.post(f"{API}/votos", json={
        "mes": "2024-01", "colaborador_id": ana.id, "colaborador_tipo": "funcionario", "respostas": [True] * 8,
    }, headers=gestor_headers)

    resp = client.get(f"{API}/relatorios/2024-01", headers=admin_headers)
    assert resp.json()["estatisticas"]["total_votos"] == 1


def test_rota_pdf(client, db, admin, admin_headers):
    ana = criar_colaborador(db, "Ana")
    _votar(db, admin, ana)
    client.post(f"{API}/resultados/2024-01/calcular", headers=admin_headers)

    resp = client.get(f"{API}/relatorios/2024-01/pdf", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content.startswith(b"%PDF")


def test_rota_excel(client, db, admin, admin_headers):
    ana = criar_colaborador(db, "Ana")
    _votar(db, admin, ana, total_sim=5)

    resp = client.get(f"{API}/relatorios/2024-01/excel", headers=admin_headers)

    assert resp.status_code == 200
    ws = load_workbook(io.BytesIO(resp.content)).active
    valores = [c for linha in ws.iter_rows(values_only=True) for c in linha]
    assert "Ana" in valores
    assert "Taxa de participação (%)" in valores


def test_relatorio_exige_admin(client, gestor_headers):
    assert client.get(f"{API}/relatorios/2024-01", headers=gestor_headers).status_code == 403


def test_relatorio_mes_invalido(client, admin_headers):
    assert client.get(f"{API}/relatorios/janeiro", headers=admin_headers).status_code == 400
