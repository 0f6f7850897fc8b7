"""
Rota de setup inicial do sistema.
Permite criar o primeiro ADMIN quando ainda não existe nenhum.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from destaque_sheq.database import get_db
from destaque_sheq.models.usuario import Usuario, PapelUsuario
from destaque_sheq.core.security import hash_password
from destaque_sheq.core.eventos import store_eventos, EventoDados

router = APIRouter()


class SetupRequest(BaseModel):
    """Schema para requisição de setup inicial"""
    nome: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    senha: str = Field(..., min_length=8)
    departamento: Optional[str] = None


class SetupResponse(BaseModel):
    """Schema para resposta de setup"""
    success: bool
    message: str
    email: Optional[str] = None


def _admin_existe(db: Session) -> bool:
    return db.query(Usuario).filter(Usuario.papel == PapelUsuario.ADMIN).first() is not None


@router.get("/status")
def get_setup_status(db: Session = Depends(get_db)):
    """
    Verifica se o sistema já foi inicializado (existe algum ADMIN).
    """
    initialized = _admin_existe(db)
    return {
        "initialized": initialized,
        "message": "Sistema já inicializado" if initialized else "Sistema aguardando inicialização - use POST /api/v1/setup/init"
    }


@router.post("/init", response_model=SetupResponse, status_code=status.HTTP_201_CREATED)
def initialize_system(
    request: SetupRequest,
    db: Session = Depends(get_db)
):
    """
    Cria o primeiro usuário ADMIN.

    IMPORTANTE: Este endpoint só funciona se NÃO existir nenhum ADMIN.
    Após a primeira execução, ele retornará erro.
    """
    if _admin_existe(db):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Sistema já foi inicializado. Não é possível criar outro administrador por este endpoint."
        )

    if db.query(Usuario).filter(Usuario.email == request.email).first():
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email já cadastrado")

    usuario = Usuario(
        nome=request.nome,
        email=request.email,
        senha_hash=hash_password(request.senha),
        papel=PapelUsuario.ADMIN,
        departamento=request.departamento
    )
    db.add(usuario)
    db.commit()

    print(f"[SETUP] Administrador inicial criado: {request.email}")
    store_eventos.publicar(EventoDados.USUARIOS_ALTERADOS, usuario_id=usuario.id)

    return SetupResponse(
        success=True,
        message="Sistema inicializado com sucesso! Use o email e senha para fazer login.",
        email=request.email
    )
