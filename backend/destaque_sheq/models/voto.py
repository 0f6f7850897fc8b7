from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON, UniqueConstraint, Enum as SQLEnum
from datetime import datetime
from destaque_sheq.models.base import Base
from destaque_sheq.models.colaborador import TipoColaborador


class Voto(Base):
    """
    Voto de um gestor em um colaborador, para um mês

    Cada voto guarda as 8 respostas SHEQ (sim/não) e o total de "sim".
    Um gestor vota uma única vez por colaborador e por categoria em cada mês.
    """
    __tablename__ = "votos"

    id = Column(Integer, primary_key=True, index=True)

    # Histórico é mantido mesmo que a conta do gestor seja excluída
    eleitor_id = Column(Integer, ForeignKey('usuarios.id', ondelete='SET NULL'), nullable=True, index=True)
    eleitor_nome = Column(String(200), nullable=False)

    # Sem FK: os votos permanecem após a exclusão do colaborador
    colaborador_id = Column(Integer, nullable=False, index=True)
    colaborador_nome = Column(String(200), nullable=False)
    colaborador_tipo = Column(
        SQLEnum(TipoColaborador, values_callable=lambda e: [m.value for m in e]),
        nullable=False
    )

    mes = Column(String(7), nullable=False, index=True)  # Formato: "2024-01"
    respostas = Column(JSON, nullable=False)  # Lista com 8 booleanos
    total_sim = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint('eleitor_id', 'colaborador_id', 'mes', name='uq_voto_eleitor_colaborador_mes'),
        UniqueConstraint('eleitor_id', 'colaborador_tipo', 'mes', name='uq_voto_eleitor_tipo_mes'),
    )

    def __repr__(self):
        return f"<Voto {self.eleitor_nome} -> {self.colaborador_nome} ({self.mes})>"
