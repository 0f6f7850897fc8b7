from fastapi import APIRouter, Depends, HTTPException, UploadFile, File, Response, status
from sqlalchemy.orm import Session
from typing import Optional

from destaque_sheq.api.deps import get_db, get_current_user, require_admin
from destaque_sheq.api.utils import get_by_id, update_entity
from destaque_sheq.core.eventos import store_eventos, EventoDados
from destaque_sheq.models.colaborador import Colaborador, TipoColaborador
from destaque_sheq.models.usuario import Usuario
from destaque_sheq.schemas.colaborador import (
    ColaboradorCreate, ColaboradorUpdate, ColaboradorResponse, ColaboradorListResponse,
    PreviaImportacaoResponse, ImportacaoResponse
)
from destaque_sheq.services.importacao_service import importacao_service, ImportacaoError

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("", response_model=ColaboradorListResponse)
def listar_colaboradores(
    tipo: Optional[TipoColaborador] = None,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    """Listar colaboradores ordenados por nome (filtro opcional por tipo)"""
    query = db.query(Colaborador)
    if tipo:
        query = query.filter(Colaborador.tipo == tipo)

    items = query.order_by(Colaborador.nome).all()
    return ColaboradorListResponse(
        total=len(items),
        items=[ColaboradorResponse.model_validate(c) for c in items]
    )


# ============ IMPORTAÇÃO EM LOTE ============

@router.get("/importar/modelo")
def baixar_modelo_importacao(
    current_user: Usuario = Depends(require_admin)
):
    """Planilha modelo com as colunas Nome, Departamento, Tipo e Empresa"""
    return Response(
        content=importacao_service.gerar_modelo(),
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="modelo-colaboradores.xlsx"'}
    )


def _ler_upload(arquivo: UploadFile) -> list:
    try:
        return importacao_service.ler_planilha(arquivo.file.read(), arquivo.filename or "")
    except ImportacaoError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/importar/previa", response_model=PreviaImportacaoResponse)
def previa_importacao(
    arquivo: UploadFile = File(...),
    current_user: Usuario = Depends(require_admin)
):
    """
    Valida a planilha linha a linha sem gravar nada
    """
    linhas = _ler_upload(arquivo)
    return importacao_service.resumo(linhas)


@router.post("/importar", response_model=ImportacaoResponse)
def importar_colaboradores(
    arquivo: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Importa as linhas válidas da planilha (linhas com erro são apenas reportadas)
    """
    linhas = _ler_upload(arquivo)
    importados = importacao_service.importar(db, linhas)
    return {**importacao_service.resumo(linhas), "importados": importados}


# ============ CRUD ============

@router.get("/{colaborador_id}", response_model=ColaboradorResponse)
def obter_colaborador(
    colaborador_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user)
):
    return get_by_id(db, Colaborador, colaborador_id, error_message="Colaborador não encontrado")


@router.post("", response_model=ColaboradorResponse, status_code=status.HTTP_201_CREATED)
def criar_colaborador(
    data: ColaboradorCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Criar colaborador (requer ADMIN)"""
    colaborador = Colaborador(**data.model_dump())
    db.add(colaborador)
    db.commit()
    db.refresh(colaborador)

    store_eventos.publicar(EventoDados.COLABORADORES_ALTERADOS, colaborador_id=colaborador.id)
    return colaborador


@router.put("/{colaborador_id}", response_model=ColaboradorResponse)
def atualizar_colaborador(
    colaborador_id: int,
    data: ColaboradorUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """
    Atualizar colaborador (requer ADMIN)

    Terceirizado exige empresa; funcionário nunca tem empresa.
    """
    colaborador = get_by_id(db, Colaborador, colaborador_id, error_message="Colaborador não encontrado")

    dados = {
        campo: valor for campo, valor in data.model_dump(exclude_unset=True).items()
        if valor is not None or campo in ("empresa", "foto")
    }
    tipo = dados.get("tipo") or colaborador.tipo
    empresa = dados["empresa"] if "empresa" in dados else colaborador.empresa

    if tipo == TipoColaborador.TERCEIRIZADO:
        if not (empresa or "").strip():
            raise HTTPException(status_code=400, detail="Empresa é obrigatória para terceirizados")
        dados["empresa"] = empresa.strip()
    else:
        dados["empresa"] = None

    colaborador = update_entity(db, colaborador, dados)

    store_eventos.publicar(EventoDados.COLABORADORES_ALTERADOS, colaborador_id=colaborador.id)
    return colaborador


@router.delete("/{colaborador_id}", status_code=status.HTTP_204_NO_CONTENT)
def excluir_colaborador(
    colaborador_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_admin)
):
    """Excluir colaborador (requer ADMIN). Os votos recebidos são mantidos no histórico."""
    colaborador = get_by_id(db, Colaborador, colaborador_id, error_message="Colaborador não encontrado")

    db.delete(colaborador)
    db.commit()

    store_eventos.publicar(EventoDados.COLABORADORES_ALTERADOS, colaborador_id=colaborador_id)
    return None
