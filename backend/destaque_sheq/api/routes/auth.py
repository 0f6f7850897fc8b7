from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from destaque_sheq.database import get_db
from destaque_sheq.models.usuario import Usuario, PapelUsuario
from destaque_sheq.schemas.usuario import UsuarioLogin, UsuarioSignup, Token, UsuarioResponse
from destaque_sheq.core.security import verify_password, create_access_token, hash_password
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.api.utils import validate_unique, commit_or_conflict

router = APIRouter()


def _gerar_token(usuario: Usuario) -> dict:
    access_token = create_access_token(usuario)
    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": UsuarioResponse.model_validate(usuario),
    }


@router.post("/login", response_model=Token)
def login(
    credentials: UsuarioLogin,
    db: Session = Depends(get_db)
):
    """
    Autenticação de usuário

    Fluxo:
    1. Busca o usuário pelo email
    2. Verifica a senha
    3. Gera JWT token com user_id e papel
    """
    usuario = db.query(Usuario).filter_by(email=credentials.email).first()

    if not usuario or not verify_password(credentials.senha, usuario.senha_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Email ou senha incorretos"
        )

    return _gerar_token(usuario)


@router.post("/signup", response_model=Token, status_code=status.HTTP_201_CREATED)
def signup(
    data: UsuarioSignup,
    db: Session = Depends(get_db)
):
    """
    Auto-cadastro de gestor

    Toda conta criada por aqui é GESTOR; administradores são promovidos
    por outro administrador.
    """
    validate_unique(db, Usuario, "email", data.email, display_name="Email")

    usuario = Usuario(
        nome=data.nome,
        email=data.email,
        senha_hash=hash_password(data.senha),
        papel=PapelUsuario.GESTOR,
        departamento=data.departamento
    )
    db.add(usuario)
    commit_or_conflict(db, "Email já cadastrado")
    db.refresh(usuario)

    store_eventos.publicar(EventoDados.USUARIOS_ALTERADOS, usuario_id=usuario.id)
    return _gerar_token(usuario)
