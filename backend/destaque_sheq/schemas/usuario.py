from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from destaque_sheq.models.usuario import PapelUsuario
import re


def _validar_forca_senha(v: str) -> str:
    """Valida força da senha"""
    if len(v) < 8:
        raise ValueError('Senha deve ter no mínimo 8 caracteres')
    if not re.search(r'[A-Z]', v):
        raise ValueError('Senha deve conter pelo menos uma letra maiúscula')
    if not re.search(r'[a-z]', v):
        raise ValueError('Senha deve conter pelo menos uma letra minúscula')
    if not re.search(r'\d', v):
        raise ValueError('Senha deve conter pelo menos um número')
    return v


class UsuarioBase(BaseModel):
    """Schema base para Usuario"""
    nome: str = Field(..., min_length=2, max_length=200)
    email: EmailStr
    departamento: Optional[str] = Field(None, max_length=100)


class UsuarioCreate(UsuarioBase):
    """Schema para admin criar usuário"""
    senha: str = Field(..., min_length=8)
    papel: PapelUsuario = PapelUsuario.GESTOR

    @field_validator('senha')
    @classmethod
    def validate_senha(cls, v):
        return _validar_forca_senha(v)


class UsuarioSignup(UsuarioBase):
    """Schema para auto-cadastro (sempre cria gestor)"""
    senha: str = Field(..., min_length=8)

    @field_validator('senha')
    @classmethod
    def validate_senha(cls, v):
        return _validar_forca_senha(v)


class UsuarioUpdate(BaseModel):
    """Schema para atualizar Usuario (email e senha não são alterados aqui)"""
    nome: Optional[str] = Field(None, min_length=2, max_length=200)
    papel: Optional[PapelUsuario] = None
    departamento: Optional[str] = Field(None, max_length=100)


class UsuarioResponse(UsuarioBase):
    """Schema de resposta para Usuario (SEM senha!)"""
    id: int
    papel: PapelUsuario
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class UsuarioListResponse(BaseModel):
    items: List[UsuarioResponse]
    total: int


class UsuarioLogin(BaseModel):
    """Schema para login"""
    email: EmailStr
    senha: str


class Token(BaseModel):
    """Schema de resposta para autenticação"""
    access_token: str
    token_type: str = "bearer"
    user: UsuarioResponse
