from sqlalchemy import Column, Integer, String, Enum as SQLEnum
import enum
from destaque_sheq.models.base import Base, TimestampMixin


class TipoColaborador(str, enum.Enum):
    """Categorias de indicados ao Destaque SHEQ"""
    FUNCIONARIO = "funcionario"    # Funcionário próprio
    TERCEIRIZADO = "terceirizado"  # Prestador de empresa contratada


class Colaborador(Base, TimestampMixin):
    """
    Colaboradores que podem ser indicados na votação mensal

    Terceirizados sempre possuem empresa; funcionários nunca.
    """
    __tablename__ = "colaboradores"

    id = Column(Integer, primary_key=True, index=True)

    nome = Column(String(200), nullable=False, index=True)
    departamento = Column(String(100), nullable=False)
    tipo = Column(
        SQLEnum(TipoColaborador, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        index=True
    )
    empresa = Column(String(200), nullable=True)  # Obrigatório para terceirizados
    foto = Column(String(500), nullable=True)  # URL da foto

    def __repr__(self):
        return f"<Colaborador {self.nome} ({self.tipo.value if self.tipo else '-'})>"
