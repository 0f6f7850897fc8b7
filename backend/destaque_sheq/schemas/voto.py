from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from destaque_sheq.models.colaborador import TipoColaborador
from destaque_sheq.core.meses import validar_mes

TOTAL_PERGUNTAS = 8


class _ComMes(BaseModel):
    mes: str = Field(..., description="Mês de referência (AAAA-MM)")

    @field_validator('mes')
    @classmethod
    def validate_mes(cls, v):
        return validar_mes(v)


class IndicacaoVoto(BaseModel):
    """Um colaborador indicado e as 8 respostas SHEQ"""
    colaborador_id: int
    respostas: List[bool] = Field(..., min_length=TOTAL_PERGUNTAS, max_length=TOTAL_PERGUNTAS)


class VotoCreate(_ComMes, IndicacaoVoto):
    """Voto individual (o eleitor vem do token)"""
    colaborador_tipo: TipoColaborador


class CedulaCreate(_ComMes):
    """Cédula completa: um funcionário e um terceirizado, gravados juntos"""
    funcionario: IndicacaoVoto
    terceirizado: IndicacaoVoto


class VotoResponse(BaseModel):
    id: int
    eleitor_id: Optional[int] = None
    eleitor_nome: str
    colaborador_id: int
    colaborador_nome: str
    colaborador_tipo: TipoColaborador
    mes: str
    respostas: List[bool]
    total_sim: int
    created_at: datetime

    class Config:
        from_attributes = True


class VotoListResponse(BaseModel):
    total: int
    items: List[VotoResponse]


class CedulaResponse(BaseModel):
    mes: str
    votos: List[VotoResponse]


class StatusVotoResponse(BaseModel):
    mes: str
    ja_votou: bool
    funcionario: bool = False
    terceirizado: bool = False


class PerguntaSheq(BaseModel):
    numero: int
    texto: str
