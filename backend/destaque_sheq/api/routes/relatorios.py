from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from destaque_sheq.api.deps import get_db, require_admin
from destaque_sheq.core.meses import MES_REGEX
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.schemas.relatorio import RelatorioMensalResponse, HistoricoParticipacaoResponse
from destaque_sheq.services.relatorio_service import relatorio_service
from destaque_sheq.services.pdf_service import pdf_service
from destaque_sheq.services.excel_service import excel_service

router = APIRouter()


def _relatorio(db: Session, mes: str) -> dict:
    if not MES_REGEX.match(mes):
        raise HTTPException(status_code=400, detail="Mês deve estar no formato AAAA-MM")
    return relatorio_service.relatorio_mensal(db, mes)


@router.get("/participacao/historico", response_model=HistoricoParticipacaoResponse)
def historico_participacao(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Participação dos gestores em cada período de votação"""
    items = relatorio_service.historico_participacao(db)
    return {"total": len(items), "items": items}


@router.get("/{mes}", response_model=RelatorioMensalResponse)
def relatorio_mensal(
    mes: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Estatísticas de participação, vencedores e rankings do mês"""
    return _relatorio(db, mes)


@router.get("/{mes}/pdf")
def relatorio_mensal_pdf(
    mes: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    pdf_bytes = pdf_service.gerar_relatorio_mensal(_relatorio(db, mes))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="relatorio-sheq-{mes}.pdf"'}
    )


@router.get("/{mes}/excel")
def relatorio_mensal_excel(
    mes: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    relatorio = _relatorio(db, mes)
    conteudo = excel_service.gerar_planilha(relatorio_service.linhas_planilha(relatorio), f"Relatório {mes}")
    return Response(
        content=conteudo,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="relatorio-sheq-{mes}.xlsx"'}
    )
