from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from destaque_sheq.schemas.colaborador import ColaboradorResponse


class VencedorCategoria(BaseModel):
    """Vencedor de uma categoria no mês"""
    colaborador: ColaboradorResponse
    total_votos: int
    total_sim: int
    empate: bool  # Segundo colocado com mesmos sim e votos


class ResultadoMensalResponse(BaseModel):
    id: int
    mes: str
    funcionario: Optional[VencedorCategoria] = None
    terceirizado: Optional[VencedorCategoria] = None
    created_at: datetime
    updated_at: datetime


class ResultadoListResponse(BaseModel):
    total: int
    items: List[ResultadoMensalResponse]


class CalculoResultadoResponse(BaseModel):
    message: str
    resultado: Optional[ResultadoMensalResponse] = None
