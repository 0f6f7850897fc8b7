"""
Database Helpers - Funções utilitárias para operações de banco de dados
Elimina duplicação de código em todas as rotas
"""
from typing import Type, TypeVar, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from fastapi import HTTPException

T = TypeVar('T')


def get_by_id(
    db: Session,
    model: Type[T],
    entity_id: int,
    error_message: str = None
) -> T:
    """
    Busca entidade por ID com validação automática.

    Args:
        db: Sessão do banco de dados
        model: Classe do modelo SQLAlchemy
        entity_id: ID da entidade
        error_message: Mensagem customizada de erro (opcional)

    Returns:
        Entidade encontrada

    Raises:
        HTTPException 404 se a entidade não existir

    Usage:
        colaborador = get_by_id(db, Colaborador, colaborador_id)
    """
    entity = db.query(model).filter(model.id == entity_id).first()

    if not entity:
        msg = error_message or f"{model.__name__} não encontrado"
        raise HTTPException(status_code=404, detail=msg)

    return entity


def validate_unique(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
    exclude_id: int = None,
    display_name: str = None
) -> None:
    """
    Valida unicidade de campo.

    Args:
        db: Sessão do banco de dados
        model: Classe do modelo
        field_name: Nome do campo a validar
        field_value: Valor do campo
        exclude_id: ID a excluir da validação (para updates)
        display_name: Nome do campo para exibição na mensagem

    Raises:
        HTTPException 409 se valor já existir

    Usage:
        validate_unique(db, Usuario, "email", email, display_name="Email")
        validate_unique(db, PeriodoVotacao, "mes", mes, exclude_id=periodo.id)
    """
    field = getattr(model, field_name)
    query = db.query(model).filter(field == field_value)

    if exclude_id:
        query = query.filter(model.id != exclude_id)

    if query.first():
        name = display_name or field_name
        raise HTTPException(status_code=409, detail=f"{name} já cadastrado")


def commit_or_conflict(db: Session, detail: str) -> None:
    """
    Faz commit e converte violação de constraint única em 409.

    Usage:
        db.add(voto)
        commit_or_conflict(db, "Voto já registrado")
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail=detail)
