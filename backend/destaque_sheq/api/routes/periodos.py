from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional

from destaque_sheq.api.deps import get_db, get_current_user, require_admin
from destaque_sheq.api.utils import get_by_id, validate_unique, commit_or_conflict
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.core.meses import mes_atual
from destaque_sheq.models.periodo_votacao import PeriodoVotacao
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.schemas.periodo import (
    PeriodoVotacaoCreate, PeriodoVotacaoUpdate, PeriodoVotacaoResponse, PeriodoVotacaoListResponse
)

router = APIRouter()

PERIODO_ATIVO_EXISTENTE = "Já existe um período de votação ativo"


def _validar_unico_ativo(db: Session, exclude_id: Optional[int] = None):
    query = db.query(PeriodoVotacao).filter(PeriodoVotacao.ativo.is_(True))
    if exclude_id:
        query = query.filter(PeriodoVotacao.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=409, detail=PERIODO_ATIVO_EXISTENTE)


@router.get("", response_model=PeriodoVotacaoListResponse)
def listar_periodos(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """Listar períodos (mais recente primeiro)"""
    items = db.query(PeriodoVotacao).order_by(PeriodoVotacao.mes.desc()).all()
    return PeriodoVotacaoListResponse(
        total=len(items),
        items=[PeriodoVotacaoResponse.model_validate(p) for p in items]
    )


@router.get("/ativo", response_model=Optional[PeriodoVotacaoResponse])
def obter_periodo_ativo(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """Período ativo (ou null se nenhum)"""
    return db.query(PeriodoVotacao).filter(PeriodoVotacao.ativo.is_(True)).first()


@router.get("/mes-atual", response_model=Optional[PeriodoVotacaoResponse])
def obter_periodo_mes_atual(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """Período do mês corrente (ou null se não cadastrado)"""
    return db.query(PeriodoVotacao).filter(PeriodoVotacao.mes == mes_atual()).first()


@router.get("/{periodo_id}", response_model=PeriodoVotacaoResponse)
def obter_periodo(
    periodo_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    return get_by_id(db, PeriodoVotacao, periodo_id, error_message="Período não encontrado")


@router.post("", response_model=PeriodoVotacaoResponse, status_code=status.HTTP_201_CREATED)
def criar_periodo(
    data: PeriodoVotacaoCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Criar período de votação (requer ADMIN)

    Apenas um período pode estar ativo; o índice único parcial em `ativo`
    garante isso mesmo com requisições simultâneas.
    """
    validate_unique(db, PeriodoVotacao, "mes", data.mes, display_name="Período do mês")
    if data.ativo:
        _validar_unico_ativo(db)

    periodo = PeriodoVotacao(**data.model_dump())
    db.add(periodo)
    commit_or_conflict(db, PERIODO_ATIVO_EXISTENTE if data.ativo else "Período do mês já cadastrado")
    db.refresh(periodo)

    store_eventos.publicar(EventoDados.PERIODOS_ALTERADOS, mes=periodo.mes)
    return periodo


@router.put("/{periodo_id}", response_model=PeriodoVotacaoResponse)
def atualizar_periodo(
    periodo_id: int,
    data: PeriodoVotacaoUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Atualizar período (requer ADMIN)"""
    periodo = get_by_id(db, PeriodoVotacao, periodo_id, error_message="Período não encontrado")

    dados = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}

    if "mes" in dados and dados["mes"] != periodo.mes:
        validate_unique(db, PeriodoVotacao, "mes", dados["mes"], exclude_id=periodo.id,
                        display_name="Período do mês")

    data_inicio = dados.get("data_inicio", periodo.data_inicio)
    data_fim = dados.get("data_fim", periodo.data_fim)
    if data_fim < data_inicio:
        raise HTTPException(status_code=400, detail="Data de fim deve ser igual ou posterior à data de início")

    if dados.get("ativo") and not periodo.ativo:
        _validar_unico_ativo(db, exclude_id=periodo.id)

    for campo, valor in dados.items():
        setattr(periodo, campo, valor)

    commit_or_conflict(db, PERIODO_ATIVO_EXISTENTE if dados.get("ativo") else "Período do mês já cadastrado")
    db.refresh(periodo)

    store_eventos.publicar(EventoDados.PERIODOS_ALTERADOS, mes=periodo.mes)
    return periodo
