from pydantic import BaseModel
from typing import Optional, List
from destaque_sheq.schemas.resultado import ResultadoMensalResponse


class EstatisticasParticipacao(BaseModel):
    total_votos: int
    total_eleitores: int       # Usuários admin + gestor
    eleitores_votantes: int    # Votaram ao menos uma vez no mês
    taxa_participacao: int     # Percentual arredondado (0-100)


class ItemRanking(BaseModel):
    posicao: int
    colaborador_id: int
    colaborador_nome: str
    departamento: Optional[str] = None
    empresa: Optional[str] = None
    total_votos: int
    total_sim: int


class RelatorioMensalResponse(BaseModel):
    mes: str
    estatisticas: EstatisticasParticipacao
    resultado: Optional[ResultadoMensalResponse] = None
    ranking_funcionarios: List[ItemRanking]
    ranking_terceirizados: List[ItemRanking]


class ParticipacaoPeriodo(BaseModel):
    mes: str
    ativo: bool
    finalizado: bool
    total_votos: int
    eleitores_votantes: int
    total_eleitores: int
    taxa_participacao: int


class HistoricoParticipacaoResponse(BaseModel):
    total: int
    items: List[ParticipacaoPeriodo]
