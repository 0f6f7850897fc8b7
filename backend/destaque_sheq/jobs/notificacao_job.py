"""
Job de lembrete automático da votação
Executa uma vez por dia e envia o lembrete aos gestores quando faltam
`reminder_days` dias para o fim do período ativo
"""
from datetime import date, datetime
from typing import Optional
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session
from destaque_sheq.database import SessionLocal
from destaque_sheq.models.periodo_votacao import PeriodoVotacao
from destaque_sheq.schemas.notificacao import TipoNotificacao
from destaque_sheq.services.configuracao_service import configuracao_service
from destaque_sheq.services.notificacao_service import notificacao_service

# Scheduler global
scheduler: Optional[BackgroundScheduler] = None


def verificar_lembrete(db: Session, hoje: Optional[date] = None, **kwargs) -> Optional[dict]:
    """
    Envia o lembrete se o período ativo termina em exatamente `reminder_days` dias.

    Args:
        db: Sessão do banco
        hoje: Data de referência (padrão: hoje)
        kwargs: Repassados para notificacao_service.enviar_notificacao

    Returns:
        Resultado do envio, ou None se nada foi enviado
    """
    hoje = hoje or date.today()
    config = configuracao_service.obter(db, "email_notifications")

    if not config.enabled or not config.voting_reminder:
        print("[NOTIFICACAO JOB] Lembretes desabilitados nas configurações")
        return None

    periodo = db.query(PeriodoVotacao).filter(PeriodoVotacao.ativo.is_(True)).first()
    if not periodo:
        print("[NOTIFICACAO JOB] Nenhum período ativo")
        return None

    dias_restantes = (periodo.data_fim.date() - hoje).days
    if dias_restantes != config.reminder_days:
        print(f"[NOTIFICACAO JOB] Período {periodo.mes} termina em {dias_restantes} dias - sem lembrete hoje")
        return None

    print(f"[NOTIFICACAO JOB] Enviando lembrete de {periodo.mes} ({dias_restantes} dias para o fim)")
    resultado = notificacao_service.enviar_notificacao(
        db, TipoNotificacao.VOTING_REMINDER, periodo.mes, **kwargs
    )
    print(f"[NOTIFICACAO JOB] {resultado['message']}")
    return resultado


def executar_verificacao():
    """
    Executada pelo scheduler uma vez por dia.
    """
    print(f"[NOTIFICACAO JOB] Verificando lembretes - {datetime.now()}")

    db: Session = SessionLocal()
    try:
        verificar_lembrete(db)
    except Exception as e:
        print(f"[NOTIFICACAO JOB] Erro na verificação: {type(e).__name__} - {e}")
    finally:
        db.close()


def iniciar_scheduler(hora: int = 8):
    """
    Inicia o scheduler com a verificação diária de lembretes.

    Args:
        hora: Hora do dia em que a verificação roda (padrão: 8h)
    """
    global scheduler

    if scheduler is not None:
        print("[NOTIFICACAO JOB] Scheduler já iniciado")
        return

    scheduler = BackgroundScheduler()

    scheduler.add_job(
        func=executar_verificacao,
        trigger=CronTrigger(hour=hora, minute=0),
        id='lembrete_votacao',
        name='Lembrete de encerramento da votação SHEQ',
        replace_existing=True
    )

    scheduler.start()
    print(f"[NOTIFICACAO JOB] Scheduler iniciado - verificação diária às {hora:02d}:00")


def parar_scheduler():
    """Para o scheduler"""
    global scheduler

    if scheduler is not None:
        scheduler.shutdown(wait=False)
        scheduler = None
        print("[NOTIFICACAO JOB] Scheduler parado")
