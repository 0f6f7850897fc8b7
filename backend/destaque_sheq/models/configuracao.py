from sqlalchemy import Column, String, DateTime, JSON
from datetime import datetime
from destaque_sheq.models.base import Base


class ConfiguracaoSistema(Base):
    """
    Configurações do sistema em formato chave/valor (valor em JSON)

    Chaves conhecidas: voting_period, email_notifications,
    tie_breaker_criteria, general_settings, email_template
    """
    __tablename__ = "configuracoes_sistema"

    chave = Column(String(100), primary_key=True)
    valor = Column(JSON, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<ConfiguracaoSistema {self.chave}>"
