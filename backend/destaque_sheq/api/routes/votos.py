from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Optional, List

from destaque_sheq.api.deps import get_db, get_current_user, require_admin
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.core.meses import MES_REGEX
from destaque_sheq.models.colaborador import TipoColaborador
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.models.voto import Voto
from destaque_sheq.schemas.voto import (
    VotoCreate, CedulaCreate, VotoResponse, VotoListResponse, CedulaResponse,
    StatusVotoResponse, PerguntaSheq
)
from destaque_sheq.services.voto_service import voto_service, PERGUNTAS_SHEQ

router = APIRouter()

MES_QUERY = Query(..., pattern=MES_REGEX.pattern, description="Mês (AAAA-MM)")


@router.get("/perguntas", response_model=List[PerguntaSheq])
def listar_perguntas(
    current_user: Usuario = Depends(get_current_user)
):
    """As 8 perguntas SHEQ respondidas em cada voto"""
    return [{"numero": i, "texto": texto} for i, texto in enumerate(PERGUNTAS_SHEQ, start=1)]


@router.get("/status", response_model=StatusVotoResponse)
def status_voto(
    mes: str = MES_QUERY,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """Indica se o usuário logado já votou no mês"""
    return voto_service.status(db, current_user.id, mes)


@router.post("", response_model=VotoResponse, status_code=status.HTTP_201_CREATED)
def registrar_voto(
    data: VotoCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """
    Registrar um voto individual

    O eleitor é o usuário do token. Um voto por colaborador e por categoria no mês.
    """
    votos = voto_service.registrar(db, current_user, data.mes, [(data, data.colaborador_tipo)])
    return votos[0]


@router.post("/cedula", response_model=CedulaResponse, status_code=status.HTTP_201_CREATED)
def registrar_cedula(
    data: CedulaCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """
    Registrar a cédula completa (um funcionário e um terceirizado)

    Os dois votos são gravados na mesma transação: ou ambos, ou nenhum.
    """
    if voto_service.status(db, current_user.id, data.mes)["ja_votou"]:
        raise HTTPException(status_code=409, detail="Você já votou neste mês")

    votos = voto_service.registrar(db, current_user, data.mes, [
        (data.funcionario, TipoColaborador.FUNCIONARIO),
        (data.terceirizado, TipoColaborador.TERCEIRIZADO),
    ])
    return CedulaResponse(mes=data.mes, votos=[VotoResponse.model_validate(v) for v in votos])


# ============ ENDPOINTS PARA ADMIN ============

@router.get("", response_model=VotoListResponse)
def listar_votos(
    mes: Optional[str] = Query(None, pattern=MES_REGEX.pattern),
    colaborador_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Listar votos (requer ADMIN)"""
    query = db.query(Voto)
    if mes:
        query = query.filter(Voto.mes == mes)
    if colaborador_id:
        query = query.filter(Voto.colaborador_id == colaborador_id)

    items = query.order_by(Voto.mes.desc(), Voto.id).all()
    return VotoListResponse(
        total=len(items),
        items=[VotoResponse.model_validate(v) for v in items]
    )


@router.delete("/mes/{mes}")
def excluir_votos_mes(
    mes: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Excluir todos os votos do mês (requer ADMIN)"""
    if not MES_REGEX.match(mes):
        raise HTTPException(status_code=400, detail="Mês deve estar no formato AAAA-MM")

    removidos = db.query(Voto).filter(Voto.mes == mes).delete(synchronize_session=False)
    db.commit()

    print(f"[VOTOS] {removidos} votos de {mes} excluídos por {current_user.email}")
    store_eventos.publicar(EventoDados.VOTOS_ALTERADOS, mes=mes)
    return {"mes": mes, "votos_removidos": removidos}
