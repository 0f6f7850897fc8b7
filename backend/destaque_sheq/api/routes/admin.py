"""
Rotas administrativas (todas requerem ADMIN)
"""
import json
from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from destaque_sheq.api.deps import get_db, require_admin
from destaque_sheq.core.meses import MES_REGEX
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.services.admin_service import admin_service

router = APIRouter()


@router.get("/exportar")
def exportar_dados(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Exporta votos, colaboradores e resultados em um arquivo JSON"""
    dados = admin_service.exportar(db)
    nome_arquivo = f"voting_data_{date.today().isoformat()}.json"

    print(f"[ADMIN] Exportação solicitada por {current_user.email}")
    return Response(
        content=json.dumps(dados, ensure_ascii=False, indent=2),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{nome_arquivo}"'}
    )


@router.post("/resetar")
def resetar_mes_atual(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Remove votos e resultado do mês atual"""
    return admin_service.resetar_mes(db)


@router.post("/resetar/{mes}")
def resetar_mes(
    mes: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Remove votos e resultado do mês informado"""
    if not MES_REGEX.match(mes):
        raise HTTPException(status_code=400, detail="Mês deve estar no formato AAAA-MM")
    return admin_service.resetar_mes(db, mes)


@router.post("/limpar-historico")
def limpar_historico(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Remove votos e resultados com mais de 6 meses"""
    return admin_service.limpar_historico(db)


@router.post("/reprocessar")
def reprocessar_resultados(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Recalcula os vencedores de todos os meses com votos"""
    meses = admin_service.reprocessar(db)
    return {"meses": meses, "total": len(meses)}
