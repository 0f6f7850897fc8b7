from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from destaque_sheq.models.base import Base, TimestampMixin


class ResultadoMensal(Base, TimestampMixin):
    """
    Snapshot dos vencedores de um mês (um registro por mês)

    Recalculado sob demanda e gravado por upsert em `mes`.
    """
    __tablename__ = "resultados_mensais"

    id = Column(Integer, primary_key=True, index=True)
    mes = Column(String(7), nullable=False, unique=True, index=True)

    # Vencedor funcionário
    funcionario_vencedor_id = Column(Integer, ForeignKey('colaboradores.id', ondelete='SET NULL'), nullable=True)
    funcionario_total_votos = Column(Integer, default=0, nullable=False)
    funcionario_total_sim = Column(Integer, default=0, nullable=False)
    funcionario_empate = Column(Boolean, default=False, nullable=False)

    # Vencedor terceirizado
    terceiro_vencedor_id = Column(Integer, ForeignKey('colaboradores.id', ondelete='SET NULL'), nullable=True)
    terceiro_total_votos = Column(Integer, default=0, nullable=False)
    terceiro_total_sim = Column(Integer, default=0, nullable=False)
    terceiro_empate = Column(Boolean, default=False, nullable=False)

    funcionario_vencedor = relationship("Colaborador", foreign_keys=[funcionario_vencedor_id])
    terceiro_vencedor = relationship("Colaborador", foreign_keys=[terceiro_vencedor_id])

    def __repr__(self):
        return f"<ResultadoMensal {self.mes}>"
