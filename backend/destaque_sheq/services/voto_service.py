"""
Serviço de Registro de Votos
Cada indicação grava um Voto com as 8 respostas SHEQ do gestor
"""
from typing import List, Tuple
from fastapi import HTTPException
from sqlalchemy.orm import Session
from destaque_sheq.api.utils import get_by_id, commit_or_conflict
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.models.colaborador import Colaborador, TipoColaborador
from destaque_sheq.models.periodo_votacao import PeriodoVotacao
from destaque_sheq.models.voto import Voto
from destaque_sheq.schemas.voto import IndicacaoVoto

PERGUNTAS_SHEQ = [
    "Executa suas atividades priorizando o trabalho seguro?",
    "Interage com as Lideranças e Segurança do Trabalho sobre possíveis melhorias ou riscos existentes?",
    "Utiliza adequadamente todos os EPIs indicados para as atividades?",
    "Orienta de forma respeitosa seus colegas e terceiros no que diz respeito a segurança?",
    "É proativo nas atividades e interage com ações de segurança, saúde e meio ambiente?",
    "Realiza adequadamente o descarte dos resíduos gerados nas atividades?",
    "Mantém seu local de trabalho limpo e organizado?",
    "Não apresentou desvio de procedimentos de segurança neste mês?",
]

VOTO_DUPLICADO = "Voto já registrado"


def contar_sim(respostas: List[bool]) -> int:
    return sum(1 for r in respostas if r)


class VotoService:

    def registrar(
        self,
        db: Session,
        eleitor: Usuario,
        mes: str,
        indicacoes: List[Tuple[IndicacaoVoto, TipoColaborador]]
    ) -> List[Voto]:
        """
        Grava os votos do eleitor no mês em uma única transação.

        Se qualquer indicação falhar, nenhum voto é gravado.

        Raises:
            HTTPException 400: período finalizado ou tipo do colaborador diferente da categoria
            HTTPException 404: colaborador não encontrado
            HTTPException 409: voto já registrado
        """
        periodo = db.query(PeriodoVotacao).filter(PeriodoVotacao.mes == mes).first()
        if periodo and periodo.finalizado:
            raise HTTPException(status_code=400, detail="Período de votação finalizado para este mês")

        votos = []
        for indicacao, tipo in indicacoes:
            colaborador = get_by_id(
                db, Colaborador, indicacao.colaborador_id,
                error_message="Colaborador não encontrado"
            )
            if colaborador.tipo != tipo:
                raise HTTPException(
                    status_code=400,
                    detail=f"Colaborador {colaborador.nome} não é {tipo.value}"
                )

            ja_existe = db.query(Voto).filter(
                Voto.eleitor_id == eleitor.id,
                Voto.mes == mes,
                (Voto.colaborador_id == colaborador.id) | (Voto.colaborador_tipo == tipo)
            ).first()
            if ja_existe:
                raise HTTPException(status_code=409, detail=VOTO_DUPLICADO)

            votos.append(Voto(
                eleitor_id=eleitor.id,
                eleitor_nome=eleitor.nome,
                colaborador_id=colaborador.id,
                colaborador_nome=colaborador.nome,
                colaborador_tipo=tipo,
                mes=mes,
                respostas=list(indicacao.respostas),
                total_sim=contar_sim(indicacao.respostas),
            ))

        db.add_all(votos)
        commit_or_conflict(db, VOTO_DUPLICADO)
        for voto in votos:
            db.refresh(voto)

        print(f"[VOTOS] {eleitor.nome} registrou {len(votos)} voto(s) em {mes}: "
              + ", ".join(f"{v.colaborador_nome} ({v.total_sim} sim)" for v in votos))
        store_eventos.publicar(EventoDados.VOTOS_ALTERADOS, mes=mes)
        return votos

    def status(self, db: Session, eleitor_id: int, mes: str) -> dict:
        """Categorias em que o eleitor já votou no mês"""
        tipos = {
            t for (t,) in db.query(Voto.colaborador_tipo).filter(
                Voto.eleitor_id == eleitor_id,
                Voto.mes == mes
            ).all()
        }
        return {
            "mes": mes,
            "ja_votou": bool(tipos),
            "funcionario": TipoColaborador.FUNCIONARIO in tipos,
            "terceirizado": TipoColaborador.TERCEIRIZADO in tipos,
        }


# Instância singleton
voto_service = VotoService()
