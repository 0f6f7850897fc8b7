"""
Models do sistema Destaque SHEQ

Importar este pacote registra todas as tabelas no metadata do Base.
"""

from destaque_sheq.models.base import Base, TimestampMixin
from destaque_sheq.models.usuario import Usuario, PapelUsuario
from destaque_sheq.models.colaborador import Colaborador, TipoColaborador
from destaque_sheq.models.periodo_votacao import PeriodoVotacao
from destaque_sheq.models.voto import Voto
from destaque_sheq.models.resultado_mensal import ResultadoMensal
from destaque_sheq.models.configuracao import ConfiguracaoSistema

__all__ = [
    "Base",
    "TimestampMixin",
    "Usuario",
    "PapelUsuario",
    "Colaborador",
    "TipoColaborador",
    "PeriodoVotacao",
    "Voto",
    "ResultadoMensal",
    "ConfiguracaoSistema",
]
