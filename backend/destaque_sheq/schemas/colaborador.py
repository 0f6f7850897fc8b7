from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime
from destaque_sheq.models.colaborador import TipoColaborador


class ColaboradorBase(BaseModel):
    """Schema base para Colaborador"""
    nome: str = Field(..., min_length=1, max_length=200, description="Nome completo")
    departamento: str = Field(..., min_length=1, max_length=100)
    tipo: TipoColaborador
    empresa: Optional[str] = Field(None, max_length=200, description="Empresa contratada (terceirizados)")
    foto: Optional[str] = Field(None, max_length=500, description="URL da foto")


class ColaboradorCreate(ColaboradorBase):
    """Schema para criação de colaborador"""

    @model_validator(mode="after")
    def validar_empresa(self):
        if self.tipo == TipoColaborador.TERCEIRIZADO:
            if not (self.empresa or "").strip():
                raise ValueError("Empresa é obrigatória para terceirizados")
            self.empresa = self.empresa.strip()
        else:
            self.empresa = None
        return self


class ColaboradorUpdate(BaseModel):
    """Schema para atualização de colaborador (campos opcionais)"""
    nome: Optional[str] = Field(None, min_length=1, max_length=200)
    departamento: Optional[str] = Field(None, min_length=1, max_length=100)
    tipo: Optional[TipoColaborador] = None
    empresa: Optional[str] = Field(None, max_length=200)
    foto: Optional[str] = Field(None, max_length=500)


class ColaboradorResponse(ColaboradorBase):
    """Schema para resposta da API"""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ColaboradorListResponse(BaseModel):
    """Schema para listagem"""
    total: int
    items: List[ColaboradorResponse]


# ============ IMPORTAÇÃO EM LOTE ============

class LinhaImportacao(BaseModel):
    """Resultado da validação de uma linha da planilha"""
    linha: int  # Número da linha na planilha (cabeçalho = 1)
    nome: str
    departamento: str
    tipo: str
    empresa: Optional[str] = None
    erros: List[str] = []
    valido: bool


class PreviaImportacaoResponse(BaseModel):
    """Relatório linha a linha, antes de gravar"""
    total: int
    validos: int
    invalidos: int
    linhas: List[LinhaImportacao]


class ImportacaoResponse(PreviaImportacaoResponse):
    """Relatório após gravar as linhas válidas"""
    importados: int
