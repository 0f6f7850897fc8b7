from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session
from urllib.parse import quote

from destaque_sheq.api.deps import get_db, get_current_user
from destaque_sheq.api.utils import get_by_id
from destaque_sheq.core.meses import MES_REGEX
from destaque_sheq.models.colaborador import Colaborador, TipoColaborador
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.services.certificado_service import certificado_service
from destaque_sheq.services.configuracao_service import configuracao_service

router = APIRouter()


@router.get("/{colaborador_id}")
def gerar_certificado(
    colaborador_id: int,
    tipo: TipoColaborador,
    mes: str = Query(..., pattern=MES_REGEX.pattern, description="Mês (AAAA-MM)"),
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """
    Certificado do Destaque SHEQ em PNG (download)
    """
    if not configuracao_service.obter(db, "general_settings").certificate_generation:
        raise HTTPException(status_code=403, detail="Geração de certificados desabilitada")

    colaborador = get_by_id(db, Colaborador, colaborador_id, error_message="Colaborador não encontrado")
    if colaborador.tipo != tipo:
        raise HTTPException(status_code=400, detail=f"Colaborador {colaborador.nome} não é {tipo.value}")

    png = certificado_service.gerar(colaborador, tipo, mes)
    nome_arquivo = certificado_service.nome_arquivo(colaborador, mes)

    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(nome_arquivo)}"}
    )
