from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from destaque_sheq.api.deps import get_db, require_admin
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.schemas.notificacao import NotificacaoRequest, NotificacaoResponse
from destaque_sheq.services.configuracao_service import configuracao_service
from destaque_sheq.services.notificacao_service import notificacao_service, PeriodoNaoEncontradoError

router = APIRouter()


@router.post("/enviar", response_model=NotificacaoResponse)
def enviar_notificacao(
    data: NotificacaoRequest,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Envia email de abertura, lembrete ou encerramento da votação para todos os gestores (requer ADMIN)

    O envio é sequencial, com pausa entre emails; a resposta traz o resultado por destinatário.
    """
    config = configuracao_service.obter(db, "email_notifications")
    if not config.enabled or not getattr(config, data.tipo.value):
        raise HTTPException(status_code=400, detail="Notificações deste tipo estão desabilitadas nas configurações")

    try:
        return notificacao_service.enviar_notificacao(db, data.tipo, data.mes)
    except PeriodoNaoEncontradoError as e:
        raise HTTPException(status_code=404, detail=str(e))
