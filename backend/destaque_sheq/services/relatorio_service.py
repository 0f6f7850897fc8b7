"""
Serviço de Relatórios
Participação dos gestores, ranking por categoria e histórico por período

Os relatórios mensais ficam em cache e são invalidados pelos eventos
publicados em core.eventos após cada alteração de dados.
"""
import math
import threading
from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.models.voto import Voto
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.models.colaborador import Colaborador, TipoColaborador
from destaque_sheq.models.periodo_votacao import PeriodoVotacao
from destaque_sheq.models.resultado_mensal import ResultadoMensal
from destaque_sheq.services.resultado_service import resultado_service

# Eventos que afetam apenas o mês informado no payload
_EVENTOS_DO_MES = (EventoDados.VOTOS_ALTERADOS, EventoDados.RESULTADOS_ALTERADOS)


def taxa_participacao(votantes: int, elegiveis: int) -> int:
    """
    Percentual de participação arredondado (meio para cima).

    taxa_participacao(12, 15) -> 80
    """
    if elegiveis <= 0:
        return 0
    return int(math.floor(votantes / elegiveis * 100 + 0.5))


class RelatorioService:
    """Serviço de agregação para relatórios"""

    def __init__(self):
        self._cache: Dict[str, dict] = {}
        self._geracao = 0  # Incrementada a cada invalidação
        self._lock = threading.Lock()
        self._cancelar_inscricao = store_eventos.assinar(list(EventoDados), self._invalidar)

    def _invalidar(self, evento: EventoDados, dados: dict):
        mes = dados.get("mes")
        with self._lock:
            self._geracao += 1
            if evento in _EVENTOS_DO_MES and mes:
                self._cache.pop(mes, None)
            else:
                self._cache.clear()

    def limpar_cache(self):
        with self._lock:
            self._geracao += 1
            self._cache.clear()

    def ranking(self, votos: List[Voto], colaboradores: Dict[int, Colaborador]) -> List[dict]:
        """Ranking de uma categoria ordenado por (votos, sim) decrescente"""
        agrupados = resultado_service.agrupar_por_colaborador(votos)
        ordenados = sorted(
            agrupados,
            key=lambda item: (item["total_votos"], item["total_sim"]),
            reverse=True
        )

        ranking = []
        for posicao, item in enumerate(ordenados, start=1):
            colaborador = colaboradores.get(item["colaborador_id"])
            ranking.append({
                "posicao": posicao,
                "colaborador_id": item["colaborador_id"],
                "colaborador_nome": colaborador.nome if colaborador else item["colaborador_nome"],
                "departamento": colaborador.departamento if colaborador else None,
                "empresa": colaborador.empresa if colaborador else None,
                "total_votos": item["total_votos"],
                "total_sim": item["total_sim"],
            })
        return ranking

    def estatisticas(self, votos: List[Voto], total_eleitores: int) -> dict:
        votantes = len({v.eleitor_id for v in votos if v.eleitor_id is not None})
        return {
            "total_votos": len(votos),
            "total_eleitores": total_eleitores,
            "eleitores_votantes": votantes,
            "taxa_participacao": taxa_participacao(votantes, total_eleitores),
        }

    def relatorio_mensal(self, db: Session, mes: str) -> dict:
        """
        Relatório completo do mês (estatísticas, resultado gravado e rankings).

        Usa o cache enquanto nenhum evento de alteração for publicado.
        Um evento recebido durante a consulta impede que o resultado seja guardado.
        """
        with self._lock:
            if mes in self._cache:
                return self._cache[mes]
            geracao = self._geracao

        votos = db.query(Voto).filter(Voto.mes == mes).order_by(Voto.id).all()
        total_eleitores = db.query(Usuario).count()

        ids = {v.colaborador_id for v in votos}
        colaboradores = {
            c.id: c for c in db.query(Colaborador).filter(Colaborador.id.in_(ids)).all()
        } if ids else {}

        resultado = db.query(ResultadoMensal).filter(ResultadoMensal.mes == mes).first()

        relatorio = {
            "mes": mes,
            "estatisticas": self.estatisticas(votos, total_eleitores),
            "resultado": resultado_service.serializar(resultado) if resultado else None,
            "ranking_funcionarios": self.ranking(
                [v for v in votos if v.colaborador_tipo == TipoColaborador.FUNCIONARIO], colaboradores
            ),
            "ranking_terceirizados": self.ranking(
                [v for v in votos if v.colaborador_tipo == TipoColaborador.TERCEIRIZADO], colaboradores
            ),
        }

        with self._lock:
            if self._geracao == geracao:
                self._cache[mes] = relatorio
        return relatorio

    def historico_participacao(self, db: Session) -> List[dict]:
        """Participação em cada período de votação (mais recente primeiro)"""
        periodos = db.query(PeriodoVotacao).order_by(PeriodoVotacao.mes.desc()).all()
        total_eleitores = db.query(Usuario).count()

        historico = []
        for periodo in periodos:
            votos = db.query(Voto).filter(Voto.mes == periodo.mes).all()
            estatisticas = self.estatisticas(votos, total_eleitores)
            historico.append({
                "mes": periodo.mes,
                "ativo": periodo.ativo,
                "finalizado": periodo.finalizado,
                **estatisticas,
            })
        return historico

    def linhas_planilha(self, relatorio: dict) -> List[List]:
        """Relatório mensal como lista de linhas (para exportação em planilha)"""
        est = relatorio["estatisticas"]
        linhas: List[List] = [
            ["Relatório Destaque SHEQ", relatorio["mes"]],
            [],
            ["Total de votos", est["total_votos"]],
            ["Eleitores", est["total_eleitores"]],
            ["Eleitores que votaram", est["eleitores_votantes"]],
            ["Taxa de participação (%)", est["taxa_participacao"]],
        ]

        resultado: Optional[dict] = relatorio.get("resultado")
        if resultado:
            linhas.append([])
            linhas.append(["Vencedores", "Nome", "Votos", "Sim", "Empate"])
            for rotulo, chave in (("Funcionário", "funcionario"), ("Terceirizado", "terceirizado")):
                vencedor = resultado.get(chave)
                if vencedor:
                    linhas.append([
                        rotulo,
                        vencedor["colaborador"].nome,
                        vencedor["total_votos"],
                        vencedor["total_sim"],
                        "Sim" if vencedor["empate"] else "Não",
                    ])

        for titulo, chave in (("Ranking Funcionários", "ranking_funcionarios"),
                              ("Ranking Terceirizados", "ranking_terceirizados")):
            linhas.append([])
            linhas.append([titulo])
            linhas.append(["Posição", "Nome", "Departamento", "Empresa", "Votos", "Sim"])
            for item in relatorio[chave]:
                linhas.append([
                    item["posicao"],
                    item["colaborador_nome"],
                    item["departamento"] or "",
                    item["empresa"] or "",
                    item["total_votos"],
                    item["total_sim"],
                ])
        return linhas


# Instância singleton
relatorio_service = RelatorioService()
