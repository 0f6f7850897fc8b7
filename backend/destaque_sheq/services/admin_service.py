"""
Ferramentas administrativas
Exportação completa dos dados, reset do mês, limpeza de histórico e reprocessamento
"""
from datetime import date
from typing import Optional, List
from sqlalchemy.orm import Session
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.core.meses import mes_atual, subtrair_meses
from destaque_sheq.models.voto import Voto
from destaque_sheq.models.colaborador import Colaborador
from destaque_sheq.models.resultado_mensal import ResultadoMensal
from destaque_sheq.schemas.voto import VotoResponse
from destaque_sheq.schemas.colaborador import ColaboradorResponse
from destaque_sheq.services.resultado_service import resultado_service

MESES_HISTORICO = 6


class AdminService:

    def exportar(self, db: Session) -> dict:
        """Todos os votos, colaboradores e resultados em formato JSON"""
        votos = db.query(Voto).order_by(Voto.mes, Voto.id).all()
        colaboradores = db.query(Colaborador).order_by(Colaborador.nome).all()
        resultados = db.query(ResultadoMensal).order_by(ResultadoMensal.mes).all()

        return {
            "votos": [VotoResponse.model_validate(v).model_dump(mode="json") for v in votos],
            "colaboradores": [ColaboradorResponse.model_validate(c).model_dump(mode="json") for c in colaboradores],
            "resultados": [
                {
                    "mes": r.mes,
                    "funcionario_vencedor_id": r.funcionario_vencedor_id,
                    "funcionario_total_votos": r.funcionario_total_votos,
                    "funcionario_total_sim": r.funcionario_total_sim,
                    "funcionario_empate": r.funcionario_empate,
                    "terceiro_vencedor_id": r.terceiro_vencedor_id,
                    "terceiro_total_votos": r.terceiro_total_votos,
                    "terceiro_total_sim": r.terceiro_total_sim,
                    "terceiro_empate": r.terceiro_empate,
                }
                for r in resultados
            ],
        }

    def resetar_mes(self, db: Session, mes: Optional[str] = None) -> dict:
        """Remove votos e resultado do mês (padrão: mês atual)"""
        mes = mes or mes_atual()

        votos = db.query(Voto).filter(Voto.mes == mes).delete(synchronize_session=False)
        resultados = db.query(ResultadoMensal).filter(ResultadoMensal.mes == mes).delete(synchronize_session=False)
        db.commit()

        print(f"[ADMIN] Reset de {mes}: {votos} votos e {resultados} resultados removidos")
        store_eventos.publicar(EventoDados.DADOS_RESETADOS, mes=mes)
        return {"mes": mes, "votos_removidos": votos, "resultados_removidos": resultados}

    def limpar_historico(self, db: Session, hoje: Optional[date] = None) -> dict:
        """Remove votos e resultados de meses anteriores a 6 meses atrás"""
        limite = subtrair_meses(mes_atual(hoje), MESES_HISTORICO)

        votos = db.query(Voto).filter(Voto.mes < limite).delete(synchronize_session=False)
        resultados = db.query(ResultadoMensal).filter(ResultadoMensal.mes < limite).delete(synchronize_session=False)
        db.commit()

        print(f"[ADMIN] Histórico anterior a {limite} removido: {votos} votos, {resultados} resultados")
        store_eventos.publicar(EventoDados.DADOS_RESETADOS, limite=limite)
        return {"limite": limite, "votos_removidos": votos, "resultados_removidos": resultados}

    def reprocessar(self, db: Session) -> List[str]:
        """Recalcula os vencedores de todos os meses com votos"""
        meses = [m for (m,) in db.query(Voto.mes).distinct().order_by(Voto.mes).all()]
        for mes in meses:
            resultado_service.calcular_vencedores(db, mes)
        print(f"[ADMIN] {len(meses)} meses reprocessados")
        return meses


# Instância singleton
admin_service = AdminService()
