from datetime import date, datetime

import pytest

from destaque_sheq.config import settings
from destaque_sheq.jobs.notificacao_job import verificar_lembrete
from destaque_sheq.models import PapelUsuario
from destaque_sheq.schemas.notificacao import TipoNotificacao
from destaque_sheq.services.configuracao_service import configuracao_service
from destaque_sheq.services.notificacao_service import notificacao_service, PeriodoNaoEncontradoError

from conftest import API, criar_usuario, criar_periodo


class RemetenteFalso:
    """Registra os envios; falha para os emails informados"""

    def __init__(self, falhar=()):
        self.enviados = []
        self.falhar = set(falhar)

    def __call__(self, destinatario, assunto, corpo_html):
        self.enviados.append((destinatario, assunto, corpo_html))
        if destinatario in self.falhar:
            return False, "Destinatário recusado"
        return True, None


@pytest.fixture
def sem_pausa(monkeypatch):
    monkeypatch.setattr(settings, "EMAIL_DELAY_SEGUNDOS", 0)


def test_envia_para_todos_os_gestores(db, admin):
    criar_usuario(db, "a@odfjell.com")
    criar_usuario(db, "b@odfjell.com")
    criar_periodo(db, "2024-01")
    remetente = RemetenteFalso(falhar={"b@odfjell.com"})

    resultado = notificacao_service.enviar_notificacao(
        db, TipoNotificacao.VOTING_START, "2024-01", remetente=remetente, intervalo_segundos=0
    )

    assert [e[0] for e in remetente.enviados] == ["a@odfjell.com", "b@odfjell.com"]
    assert resultado["message"] == "Notificações enviadas: 1 com sucesso, 1 com falha"
    assert resultado["results"] == [
        {"email": "a@odfjell.com", "sucesso": True, "erro": None},
        {"email": "b@odfjell.com", "sucesso": False, "erro": "Destinatário recusado"},
    ]


def test_remetente_com_excecao_conta_como_falha(db):
    criar_usuario(db, "a@odfjell.com")
    criar_periodo(db, "2024-01")

    def quebrado(destinatario, assunto, corpo_html):
        raise ConnectionError("SMTP fora do ar")

    resultado = notificacao_service.enviar_notificacao(
        db, TipoNotificacao.VOTING_END, "2024-01", remetente=quebrado, intervalo_segundos=0
    )

    assert resultado["results"][0]["sucesso"] is False
    assert "SMTP fora do ar" in resultado["results"][0]["erro"]


def test_pausa_apenas_entre_envios(db, monkeypatch):
    for i in range(3):
        criar_usuario(db, f"g{i}@odfjell.com")
    criar_periodo(db, "2024-01")
    pausas = []
    monkeypatch.setattr("destaque_sheq.services.notificacao_service.time.sleep", pausas.append)

    notificacao_service.enviar_notificacao(
        db, TipoNotificacao.VOTING_REMINDER, "2024-01", remetente=RemetenteFalso(), intervalo_segundos=1.5
    )

    assert pausas == [1.5, 1.5]


def test_sem_gestores(db, admin):
    criar_periodo(db, "2024-01")

    resultado = notificacao_service.enviar_notificacao(
        db, TipoNotificacao.VOTING_START, "2024-01", remetente=RemetenteFalso(), intervalo_segundos=0
    )

    assert resultado == {"message": "Nenhum gestor encontrado", "results": []}


def test_periodo_inexistente(db):
    criar_usuario(db, "a@odfjell.com")

    with pytest.raises(PeriodoNaoEncontradoError):
        notificacao_service.enviar_notificacao(
            db, TipoNotificacao.VOTING_START, "2030-01", remetente=RemetenteFalso(), intervalo_segundos=0
        )


def test_montar_email_lembrete(db):
    periodo = criar_periodo(db, "2024-01", data_fim=datetime(2024, 1, 31, 23, 59))

    assunto, html = notificacao_service.montar_email(TipoNotificacao.VOTING_REMINDER, periodo)

    assert assunto == "⏰ Lembrete: Votação SHEQ Janeiro/2024 - Encerra em breve"
    assert "31/01/2024" in html
    assert settings.SITE_URL in html


def test_rota_enviar_sem_smtp(client, db, admin_headers, sem_pausa):
    criar_usuario(db, "a@odfjell.com")
    criar_periodo(db, "2024-01")

    resp = client.post(f"{API}/notificacoes/enviar", json={"tipo": "voting_start", "mes": "2024-01"},
                       headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["results"] == [
        {"email": "a@odfjell.com", "sucesso": False, "erro": "Serviço de email não configurado"}
    ]


def test_rota_periodo_inexistente(client, db, admin_headers):
    criar_usuario(db, "a@odfjell.com")

    resp = client.post(f"{API}/notificacoes/enviar", json={"tipo": "voting_end", "mes": "2030-01"},
                       headers=admin_headers)

    assert resp.status_code == 404


def test_rota_tipo_desabilitado(client, db, admin_headers):
    configuracao_service.salvar(db, "email_notifications", {"enabled": True, "voting_start": False})

    resp = client.post(f"{API}/notificacoes/enviar", json={"tipo": "voting_start", "mes": "2024-01"},
                       headers=admin_headers)

    assert resp.status_code == 400


def test_rota_exige_admin(client, gestor_headers):
    resp = client.post(f"{API}/notificacoes/enviar", json={"tipo": "voting_start", "mes": "2024-01"},
                       headers=gestor_headers)

    assert resp.status_code == 403


# ============ JOB DE LEMBRETE ============

def test_lembrete_enviado_quando_faltam_dias_configurados(db):
    criar_usuario(db, "a@odfjell.com", PapelUsuario.GESTOR)
    criar_periodo(db, "2024-01", ativo=True, data_fim=datetime(2024, 1, 31, 18, 0))
    remetente = RemetenteFalso()

    resultado = verificar_lembrete(db, hoje=date(2024, 1, 28), remetente=remetente, intervalo_segundos=0)

    assert resultado["message"] == "Notificações enviadas: 1 com sucesso, 0 com falha"
    assert remetente.enviados[0][1].startswith("⏰ Lembrete")


def test_lembrete_fora_do_dia(db):
    criar_usuario(db, "a@odfjell.com")
    criar_periodo(db, "2024-01", ativo=True, data_fim=datetime(2024, 1, 31, 18, 0))
    remetente = RemetenteFalso()

    assert verificar_lembrete(db, hoje=date(2024, 1, 27), remetente=remetente, intervalo_segundos=0) is None
    assert remetente.enviados == []


def test_lembrete_desabilitado(db):
    criar_usuario(db, "a@odfjell.com")
    criar_periodo(db, "2024-01", ativo=True, data_fim=datetime(2024, 1, 31, 18, 0))
    configuracao_service.salvar(db, "email_notifications", {"voting_reminder": False})

    assert verificar_lembrete(db, hoje=date(2024, 1, 28), remetente=RemetenteFalso()) is None


def test_lembrete_sem_periodo_ativo(db):
    criar_periodo(db, "2024-01", ativo=False)

    assert verificar_lembrete(db, hoje=date(2024, 1, 28), remetente=RemetenteFalso()) is None
