from sqlalchemy import Column, Integer, String, Boolean, DateTime, Index, text
from destaque_sheq.models.base import Base, TimestampMixin


class PeriodoVotacao(Base, TimestampMixin):
    """
    Janela mensal em que os gestores podem votar

    No máximo UM período pode estar ativo; garantido pelo índice
    único parcial sobre `ativo` (apenas linhas com ativo = true).
    """
    __tablename__ = "periodos_votacao"

    id = Column(Integer, primary_key=True, index=True)

    mes = Column(String(7), nullable=False, unique=True, index=True)  # Formato: "2024-01"
    data_inicio = Column(DateTime, nullable=False)
    data_fim = Column(DateTime, nullable=False)

    ativo = Column(Boolean, default=False, nullable=False)
    finalizado = Column(Boolean, default=False, nullable=False)

    __table_args__ = (
        Index(
            "uq_periodos_votacao_ativo",
            "ativo",
            unique=True,
            postgresql_where=text("ativo IS TRUE"),
            sqlite_where=text("ativo = 1"),
        ),
    )

    def __repr__(self):
        return f"<PeriodoVotacao {self.mes} (ativo={self.ativo})>"
