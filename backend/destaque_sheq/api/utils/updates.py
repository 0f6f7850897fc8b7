"""
Update Helpers - Funções para atualização de entidades
"""
from typing import TypeVar
from sqlalchemy.orm import Session

T = TypeVar('T')


def update_entity(db: Session, entity: T, data: dict) -> T:
    """
    Aplica um dict de campos na entidade, faz commit e recarrega.

    Campos que o modelo não possui são ignorados.

    Usage:
        colaborador = update_entity(db, colaborador, dados.model_dump(exclude_unset=True))
    """
    for field, value in data.items():
        if hasattr(entity, field):
            setattr(entity, field, value)

    db.commit()
    db.refresh(entity)
    return entity
