from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import Any, Dict

from destaque_sheq.api.deps import get_db, get_current_user, require_admin
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.schemas.configuracao import ConfiguracoesSistema, MODELOS_CONFIGURACAO
from destaque_sheq.services.configuracao_service import configuracao_service

router = APIRouter()


@router.get("", response_model=ConfiguracoesSistema)
def obter_configuracoes(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """Todas as configurações (valores padrão para chaves não gravadas)"""
    return configuracao_service.obter_todas(db)


@router.put("", response_model=ConfiguracoesSistema)
def salvar_configuracoes(
    data: ConfiguracoesSistema,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Grava todas as configurações (requer ADMIN)"""
    return configuracao_service.salvar_todas(db, data)


@router.put("/{chave}")
def salvar_configuracao(
    chave: str,
    valor: Dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Grava uma chave de configuração (requer ADMIN)"""
    if chave not in MODELOS_CONFIGURACAO:
        raise HTTPException(status_code=404, detail=f"Configuração '{chave}' não existe")

    try:
        salvo = configuracao_service.salvar(db, chave, valor)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=jsonable_encoder(e.errors(include_url=False, include_context=False)))

    return {"chave": chave, "valor": salvo.model_dump(mode="json")}
