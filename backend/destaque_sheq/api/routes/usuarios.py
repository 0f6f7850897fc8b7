"""
Rotas de Gestão de Usuários

- ADMIN: cria, altera e exclui contas (admin ou gestor)
- Deve existir sempre pelo menos um ADMIN
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Optional

from destaque_sheq.api.deps import get_db, get_current_user, require_admin
from destaque_sheq.api.utils import get_by_id, validate_unique, update_entity
from destaque_sheq.core.security import hash_password
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.models.usuario import Usuario, PapelUsuario
from destaque_sheq.schemas.usuario import (
    UsuarioCreate, UsuarioUpdate, UsuarioResponse, UsuarioListResponse
)

router = APIRouter()


def _total_admins(db: Session) -> int:
    return db.query(Usuario).filter(Usuario.papel == PapelUsuario.ADMIN).count()


# ============ ENDPOINTS PARA O PRÓPRIO USUÁRIO ============

@router.get("/me", response_model=UsuarioResponse)
def obter_meu_perfil(
    current_user: Usuario = Depends(get_current_user)
):
    """
    Obter dados do próprio usuário logado
    """
    return UsuarioResponse.model_validate(current_user)


# ============ ENDPOINTS PARA ADMIN ============

@router.get("", response_model=UsuarioListResponse)
def listar_usuarios(
    papel: Optional[PapelUsuario] = None,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Listar usuários (requer ADMIN)
    """
    query = db.query(Usuario)
    if papel:
        query = query.filter(Usuario.papel == papel)

    items = query.order_by(Usuario.nome).all()
    return UsuarioListResponse(
        items=[UsuarioResponse.model_validate(u) for u in items],
        total=len(items)
    )


@router.post("", response_model=UsuarioResponse, status_code=status.HTTP_201_CREATED)
def criar_usuario(
    data: UsuarioCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Criar novo usuário (requer ADMIN)
    """
    validate_unique(db, Usuario, "email", data.email, display_name="Email")

    usuario = Usuario(
        nome=data.nome,
        email=data.email,
        senha_hash=hash_password(data.senha),
        papel=data.papel,
        departamento=data.departamento
    )

    db.add(usuario)
    db.commit()
    db.refresh(usuario)

    store_eventos.publicar(EventoDados.USUARIOS_ALTERADOS, usuario_id=usuario.id)
    return UsuarioResponse.model_validate(usuario)


@router.get("/{usuario_id}", response_model=UsuarioResponse)
def obter_usuario(
    usuario_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Obter detalhes de um usuário (requer ADMIN)
    """
    usuario = get_by_id(db, Usuario, usuario_id, error_message="Usuário não encontrado")
    return UsuarioResponse.model_validate(usuario)


@router.put("/{usuario_id}", response_model=UsuarioResponse)
def atualizar_usuario(
    usuario_id: int,
    data: UsuarioUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Atualizar nome, papel e departamento (requer ADMIN)

    Email e senha não são alterados por aqui.
    """
    usuario = get_by_id(db, Usuario, usuario_id, error_message="Usuário não encontrado")

    if (
        usuario.papel == PapelUsuario.ADMIN
        and data.papel == PapelUsuario.GESTOR
        and _total_admins(db) <= 1
    ):
        raise HTTPException(
            status_code=400,
            detail="Não é possível remover o papel do último administrador."
        )

    usuario = update_entity(db, usuario, data.model_dump(exclude_unset=True, exclude_none=True))

    store_eventos.publicar(EventoDados.USUARIOS_ALTERADOS, usuario_id=usuario.id)
    return UsuarioResponse.model_validate(usuario)


@router.delete("/{usuario_id}", status_code=status.HTTP_204_NO_CONTENT)
def excluir_usuario(
    usuario_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Excluir usuário (requer ADMIN)

    Os votos do usuário são mantidos no histórico (sem vínculo com a conta).
    """
    usuario = get_by_id(db, Usuario, usuario_id, error_message="Usuário não encontrado")

    if usuario.papel == PapelUsuario.ADMIN and _total_admins(db) <= 1:
        raise HTTPException(
            status_code=400,
            detail="Não é possível excluir o último administrador."
        )

    db.delete(usuario)
    db.commit()

    store_eventos.publicar(EventoDados.USUARIOS_ALTERADOS, usuario_id=usuario_id)
    return None
