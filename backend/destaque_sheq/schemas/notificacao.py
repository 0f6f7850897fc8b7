from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from enum import Enum
from destaque_sheq.core.meses import validar_mes


class TipoNotificacao(str, Enum):
    VOTING_START = "voting_start"
    VOTING_REMINDER = "voting_reminder"
    VOTING_END = "voting_end"


class NotificacaoRequest(BaseModel):
    tipo: TipoNotificacao
    mes: str = Field(..., description="Mês de referência (AAAA-MM)")

    @field_validator('mes')
    @classmethod
    def validate_mes(cls, v):
        return validar_mes(v)


class ResultadoEnvio(BaseModel):
    email: str
    sucesso: bool
    erro: Optional[str] = None


class NotificacaoResponse(BaseModel):
    message: str
    results: List[ResultadoEnvio]
