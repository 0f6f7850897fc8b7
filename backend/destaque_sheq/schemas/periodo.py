from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime, timezone
from destaque_sheq.core.meses import validar_mes


def _sem_fuso(v: Optional[datetime]) -> Optional[datetime]:
    """Datas são gravadas sem fuso (UTC)"""
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


class PeriodoVotacaoBase(BaseModel):
    mes: str = Field(..., description="Mês de referência (AAAA-MM)")
    data_inicio: datetime
    data_fim: datetime
    ativo: bool = False
    finalizado: bool = False

    @field_validator('mes')
    @classmethod
    def validate_mes(cls, v):
        return validar_mes(v)

    @field_validator('data_inicio', 'data_fim')
    @classmethod
    def validate_datas(cls, v):
        return _sem_fuso(v)


class PeriodoVotacaoCreate(PeriodoVotacaoBase):

    @model_validator(mode="after")
    def validar_datas(self):
        if self.data_fim < self.data_inicio:
            raise ValueError("Data de fim deve ser igual ou posterior à data de início")
        return self


class PeriodoVotacaoUpdate(BaseModel):
    mes: Optional[str] = None
    data_inicio: Optional[datetime] = None
    data_fim: Optional[datetime] = None
    ativo: Optional[bool] = None
    finalizado: Optional[bool] = None

    @field_validator('mes')
    @classmethod
    def validate_mes(cls, v):
        if v is None:
            return v
        return validar_mes(v)

    @field_validator('data_inicio', 'data_fim')
    @classmethod
    def validate_datas(cls, v):
        return _sem_fuso(v)


class PeriodoVotacaoResponse(PeriodoVotacaoBase):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class PeriodoVotacaoListResponse(BaseModel):
    total: int
    items: List[PeriodoVotacaoResponse]
