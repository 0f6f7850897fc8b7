from fastapi import Depends, Request, HTTPException
from sqlalchemy.orm import Session
from destaque_sheq.database import SessionLocal
from destaque_sheq.models.usuario import Usuario, PapelUsuario


def get_db():
    """
    Dependency para obter sessão do banco de dados
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_current_user_id(request: Request) -> int:
    """
    Extrai user_id do contexto da request (configurado pelo middleware)
    """
    if not hasattr(request.state, 'user_id'):
        raise HTTPException(status_code=401, detail="Usuário não identificado")
    return request.state.user_id


def get_current_user(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db)
) -> Usuario:
    """
    Retorna objeto Usuario completo do usuário atual
    """
    user = db.query(Usuario).filter_by(id=user_id).first()

    if not user:
        raise HTTPException(
            status_code=401,
            detail="Usuário não encontrado"
        )

    return user


def require_admin(
    user: Usuario = Depends(get_current_user)
) -> Usuario:
    """
    Dependency que requer que o usuário seja ADMIN
    """
    if user.papel != PapelUsuario.ADMIN:
        raise HTTPException(
            status_code=403,
            detail="Acesso negado: apenas administradores"
        )
    return user
