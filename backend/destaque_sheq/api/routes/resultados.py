from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from destaque_sheq.api.deps import get_db, get_current_user, require_admin
from destaque_sheq.core.meses import MES_REGEX
from destaque_sheq.models.resultado_mensal import ResultadoMensal
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.schemas.resultado import (
    ResultadoMensalResponse, ResultadoListResponse, CalculoResultadoResponse
)
from destaque_sheq.services.resultado_service import resultado_service

router = APIRouter()


def _validar_mes(mes: str):
    if not MES_REGEX.match(mes):
        raise HTTPException(status_code=400, detail="Mês deve estar no formato AAAA-MM")


@router.get("", response_model=ResultadoListResponse)
def listar_resultados(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """Resultados gravados (mais recente primeiro)"""
    items = db.query(ResultadoMensal).order_by(ResultadoMensal.mes.desc()).all()
    return {"total": len(items), "items": [resultado_service.serializar(r) for r in items]}


@router.get("/{mes}", response_model=ResultadoMensalResponse)
def obter_resultado(
    mes: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    _validar_mes(mes)
    resultado = db.query(ResultadoMensal).filter(ResultadoMensal.mes == mes).first()
    if not resultado:
        raise HTTPException(status_code=404, detail="Resultado não encontrado para este mês")
    return resultado_service.serializar(resultado)


@router.post("/{mes}/calcular", response_model=CalculoResultadoResponse)
def calcular_resultado(
    mes: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Apura os vencedores do mês e grava o resultado (requer ADMIN)

    Pode ser executado várias vezes; o resultado do mês é sobrescrito.
    """
    _validar_mes(mes)
    resultado = resultado_service.calcular_vencedores(db, mes)

    if resultado is None:
        return {"message": "Não há votos registrados para este mês.", "resultado": None}

    return {
        "message": "Resultados calculados com sucesso",
        "resultado": resultado_service.serializar(resultado)
    }
