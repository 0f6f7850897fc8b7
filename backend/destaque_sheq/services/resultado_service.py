"""
Serviço de Apuração do Destaque SHEQ
Agrupa os votos do mês por colaborador e determina o vencedor de cada categoria
"""
from typing import Optional, List, Iterable, Dict, Any
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from destaque_sheq.models.voto import Voto
from destaque_sheq.models.colaborador import Colaborador, TipoColaborador
from destaque_sheq.models.resultado_mensal import ResultadoMensal
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.schemas.colaborador import ColaboradorResponse


class ResultadoService:
    """Serviço para calcular e gravar os vencedores mensais"""

    def agrupar_por_colaborador(self, votos: Iterable[Voto]) -> List[Dict[str, Any]]:
        """
        Agrupa votos por colaborador somando votos e respostas "sim".

        A ordem de retorno é a ordem em que cada colaborador aparece
        pela primeira vez nos votos.

        Returns:
            Lista de dicts {colaborador_id, colaborador_nome, total_votos, total_sim}
        """
        agrupados: Dict[int, Dict[str, Any]] = {}
        for voto in votos:
            item = agrupados.get(voto.colaborador_id)
            if item is None:
                item = {
                    "colaborador_id": voto.colaborador_id,
                    "colaborador_nome": voto.colaborador_nome,
                    "total_votos": 0,
                    "total_sim": 0,
                }
                agrupados[voto.colaborador_id] = item
            item["total_votos"] += 1
            item["total_sim"] += voto.total_sim
        return list(agrupados.values())

    def determinar_vencedor(self, agrupados: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Ordena por (total_sim, total_votos) decrescente e retorna o primeiro.

        A ordenação é estável: em caso de empate vence quem apareceu antes.
        `empate` indica que o segundo colocado tem os mesmos sim e votos;
        o empate não é resolvido por outros critérios.
        """
        if not agrupados:
            return None

        ranking = sorted(
            agrupados,
            key=lambda item: (item["total_sim"], item["total_votos"]),
            reverse=True
        )
        vencedor = dict(ranking[0])
        vencedor["empate"] = (
            len(ranking) > 1
            and ranking[1]["total_sim"] == vencedor["total_sim"]
            and ranking[1]["total_votos"] == vencedor["total_votos"]
        )
        return vencedor

    def calcular_vencedores(self, db: Session, mes: str) -> Optional[ResultadoMensal]:
        """
        Calcula os vencedores do mês e grava o resultado (upsert por mês).

        Args:
            db: Sessão do banco
            mes: Mês no formato AAAA-MM

        Returns:
            ResultadoMensal gravado, ou None se não houver votos no mês
        """
        votos = db.query(Voto).filter(Voto.mes == mes).order_by(Voto.id).all()

        if not votos:
            print(f"[RESULTADOS] Nenhum voto para {mes}")
            return None

        vencedores = {}
        for tipo in (TipoColaborador.FUNCIONARIO, TipoColaborador.TERCEIRIZADO):
            agrupados = self.agrupar_por_colaborador(v for v in votos if v.colaborador_tipo == tipo)
            vencedor = self.determinar_vencedor(agrupados)

            # Colaborador excluído não pode ser vencedor
            if vencedor and db.get(Colaborador, vencedor["colaborador_id"]) is None:
                print(f"[RESULTADOS] Colaborador {vencedor['colaborador_id']} não encontrado - vencedor omitido")
                vencedor = None

            vencedores[tipo] = vencedor

        resultado = self._gravar(db, mes, vencedores)

        print(f"[RESULTADOS] {mes} apurado - "
              f"Funcionário: {self._descrever(vencedores[TipoColaborador.FUNCIONARIO])}, "
              f"Terceirizado: {self._descrever(vencedores[TipoColaborador.TERCEIRIZADO])}")

        store_eventos.publicar(EventoDados.RESULTADOS_ALTERADOS, mes=mes)
        return resultado

    def _gravar(self, db: Session, mes: str, vencedores: dict) -> ResultadoMensal:
        campos = {}
        for prefixo, tipo in (("funcionario", TipoColaborador.FUNCIONARIO),
                              ("terceiro", TipoColaborador.TERCEIRIZADO)):
            vencedor = vencedores.get(tipo)
            campos[f"{prefixo}_vencedor_id"] = vencedor["colaborador_id"] if vencedor else None
            campos[f"{prefixo}_total_votos"] = vencedor["total_votos"] if vencedor else 0
            campos[f"{prefixo}_total_sim"] = vencedor["total_sim"] if vencedor else 0
            campos[f"{prefixo}_empate"] = vencedor["empate"] if vencedor else False

        for tentativa in range(2):
            resultado = db.query(ResultadoMensal).filter(ResultadoMensal.mes == mes).first()
            if resultado is None:
                resultado = ResultadoMensal(mes=mes)
                db.add(resultado)
            for campo, valor in campos.items():
                setattr(resultado, campo, valor)
            try:
                db.commit()
                break
            except IntegrityError:
                # Outro processo gravou o mesmo mês; repete como atualização
                db.rollback()
                if tentativa:
                    raise

        db.refresh(resultado)
        return resultado

    def _descrever(self, vencedor: Optional[dict]) -> str:
        if not vencedor:
            return "-"
        empate = " (empate)" if vencedor["empate"] else ""
        return f"{vencedor['colaborador_nome']} {vencedor['total_sim']} sim/{vencedor['total_votos']} votos{empate}"

    def serializar(self, resultado: ResultadoMensal) -> dict:
        """Converte o ResultadoMensal no formato de ResultadoMensalResponse"""
        def _vencedor(colaborador, total_votos, total_sim, empate):
            if colaborador is None:
                return None
            return {
                "colaborador": ColaboradorResponse.model_validate(colaborador),
                "total_votos": total_votos,
                "total_sim": total_sim,
                "empate": empate,
            }

        return {
            "id": resultado.id,
            "mes": resultado.mes,
            "funcionario": _vencedor(
                resultado.funcionario_vencedor,
                resultado.funcionario_total_votos,
                resultado.funcionario_total_sim,
                resultado.funcionario_empate,
            ),
            "terceirizado": _vencedor(
                resultado.terceiro_vencedor,
                resultado.terceiro_total_votos,
                resultado.terceiro_total_sim,
                resultado.terceiro_empate,
            ),
            "created_at": resultado.created_at,
            "updated_at": resultado.updated_at,
        }


# Instância singleton
resultado_service = ResultadoService()
