from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime


class VotingPeriodConfig(BaseModel):
    """Janela padrão de votação"""
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: bool = False

    @model_validator(mode="after")
    def validar_datas(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date deve ser igual ou posterior a start_date")
        return self


class EmailNotificationsConfig(BaseModel):
    enabled: bool = True
    voting_start: bool = True
    voting_reminder: bool = True
    voting_end: bool = True
    reminder_days: int = Field(default=3, ge=1, le=31)


class TieBreakerCriteriaConfig(BaseModel):
    """Critérios de desempate (apenas informativos)"""
    funcionario: List[str] = Field(default_factory=lambda: [
        "Pontualidade", "Qualidade do trabalho", "Relacionamento interpessoal"
    ])
    terceiro: List[str] = Field(default_factory=lambda: [
        "Qualidade do serviço", "Pontualidade", "Cortesia"
    ])


class GeneralSettingsConfig(BaseModel):
    max_votes_per_user: int = Field(default=3, ge=1)
    allow_self_voting: bool = False
    results_visible_immediately: bool = False
    certificate_generation: bool = True


class EmailTemplateConfig(BaseModel):
    subject: str = "Votação {{type}} - {{month}}"
    content: str = (
        "Prezado(a) {{name}},\n\n"
        "Este é um lembrete sobre a votação do mês {{month}}.\n\n"
        "Atenciosamente,\nEquipe de Gestão"
    )


class ConfiguracoesSistema(BaseModel):
    """Todas as configurações (cada chave com seus padrões)"""
    voting_period: VotingPeriodConfig = Field(default_factory=VotingPeriodConfig)
    email_notifications: EmailNotificationsConfig = Field(default_factory=EmailNotificationsConfig)
    tie_breaker_criteria: TieBreakerCriteriaConfig = Field(default_factory=TieBreakerCriteriaConfig)
    general_settings: GeneralSettingsConfig = Field(default_factory=GeneralSettingsConfig)
    email_template: EmailTemplateConfig = Field(default_factory=EmailTemplateConfig)


# Chave -> modelo de validação
MODELOS_CONFIGURACAO = {
    "voting_period": VotingPeriodConfig,
    "email_notifications": EmailNotificationsConfig,
    "tie_breaker_criteria": TieBreakerCriteriaConfig,
    "general_settings": GeneralSettingsConfig,
    "email_template": EmailTemplateConfig,
}
