from sqlalchemy import Column, Integer, String, Enum as SQLEnum
import enum
from destaque_sheq.models.base import Base, TimestampMixin


class PapelUsuario(str, enum.Enum):
    """
    Papéis de usuário do sistema
    """
    ADMIN = "admin"    # Gerencia cadastros, períodos, relatórios e notificações
    GESTOR = "gestor"  # Vota mensalmente no Destaque SHEQ


class Usuario(Base, TimestampMixin):
    """
    Contas de acesso (administradores e gestores)

    IMPORTANTE: deve existir sempre pelo menos um ADMIN
    """
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)

    # Dados pessoais
    nome = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False, unique=True, index=True)
    senha_hash = Column(String(255), nullable=False)  # Senha hasheada com bcrypt

    # Perfil
    papel = Column(
        SQLEnum(PapelUsuario, values_callable=lambda e: [m.value for m in e]),
        default=PapelUsuario.GESTOR,
        nullable=False
    )
    departamento = Column(String(100), nullable=True)

    def __repr__(self):
        return f"<Usuario {self.nome} ({self.email})>"
