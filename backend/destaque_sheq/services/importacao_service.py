"""
Serviço de Importação de Colaboradores em Lote
Lê planilhas .xlsx (colunas Nome, Departamento, Tipo, Empresa) e valida linha a linha
"""
import io
from zipfile import BadZipFile
from typing import List, Optional, Dict, Any
from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils.exceptions import InvalidFileException
from sqlalchemy.orm import Session
from destaque_sheq.models.colaborador import Colaborador, TipoColaborador
from destaque_sheq.core.eventos import store_eventos, EventoDados

COLUNAS = ["Nome", "Departamento", "Tipo", "Empresa"]

EXEMPLOS_MODELO = [
    ["João Silva", "TI", "funcionario", ""],
    ["Maria Santos", "RH", "terceirizado", "Empresa ABC"],
    ["Pedro Costa", "Operações", "funcionario", ""],
]

TIPOS_VALIDOS = [t.value for t in TipoColaborador]

# Tamanhos máximos das colunas de colaboradores
TAMANHO_MAXIMO = {"Nome": 200, "Departamento": 100, "Empresa": 200}


class ImportacaoError(ValueError):
    """Arquivo não pode ser importado (formato inválido ou sem dados)"""
    pass


class ImportacaoService:
    """Serviço para importar colaboradores a partir de planilhas"""

    def validar_linha(self, dados: Dict[str, Any], numero_linha: int) -> dict:
        """
        Normaliza e valida uma linha da planilha.

        Returns:
            Dict no formato de LinhaImportacao (com lista de erros)
        """
        nome = self._texto(dados.get("Nome"))
        departamento = self._texto(dados.get("Departamento"))
        tipo = self._texto(dados.get("Tipo")).lower()
        empresa = self._texto(dados.get("Empresa"))
        terceirizado = tipo == TipoColaborador.TERCEIRIZADO.value

        erros = []
        if not nome:
            erros.append("Nome é obrigatório")
        if not departamento:
            erros.append("Departamento é obrigatório")
        if tipo not in TIPOS_VALIDOS:
            erros.append('Tipo deve ser "funcionario" ou "terceirizado"')
        if terceirizado and not empresa:
            erros.append("Empresa é obrigatória para terceirizados")

        valores = {"Nome": nome, "Departamento": departamento, "Empresa": empresa if terceirizado else ""}
        for coluna, valor in valores.items():
            if len(valor) > TAMANHO_MAXIMO[coluna]:
                erros.append(f"{coluna} deve ter no máximo {TAMANHO_MAXIMO[coluna]} caracteres")

        return {
            "linha": numero_linha,
            "nome": nome,
            "departamento": departamento,
            "tipo": tipo,
            "empresa": empresa if terceirizado and empresa else None,
            "erros": erros,
            "valido": not erros,
        }

    def ler_planilha(self, conteudo: bytes, nome_arquivo: Optional[str] = None) -> List[dict]:
        """
        Lê a primeira aba da planilha e valida cada linha de dados.

        A primeira linha é o cabeçalho; linhas totalmente vazias são ignoradas.

        Raises:
            ImportacaoError: arquivo não é .xlsx, está corrompido ou não tem dados
        """
        if nome_arquivo is not None and not nome_arquivo.lower().endswith(".xlsx"):
            raise ImportacaoError("Formato de arquivo inválido. Envie uma planilha .xlsx")

        try:
            wb = load_workbook(io.BytesIO(conteudo), read_only=True, data_only=True)
        except (InvalidFileException, BadZipFile, KeyError, OSError, ValueError) as e:
            raise ImportacaoError(f"Não foi possível ler a planilha: {e}")

        try:
            ws = wb.active
            linhas = list(ws.iter_rows(values_only=True))
        finally:
            wb.close()

        if not linhas:
            raise ImportacaoError("O arquivo não contém dados para importar")

        cabecalho = [self._texto(c) for c in linhas[0]]
        resultado = []
        for numero, valores in enumerate(linhas[1:], start=2):
            if all(v is None or str(v).strip() == "" for v in valores):
                continue
            dados = {col: valores[i] for i, col in enumerate(cabecalho) if col and i < len(valores)}
            resultado.append(self.validar_linha(dados, numero))

        if not resultado:
            raise ImportacaoError("O arquivo não contém dados para importar")

        print(f"[IMPORTACAO] Planilha lida: {len(resultado)} linhas, "
              f"{sum(1 for r in resultado if r['valido'])} válidas")
        return resultado

    def importar(self, db: Session, linhas: List[dict]) -> int:
        """
        Insere em lote apenas as linhas válidas (um único commit).

        Returns:
            Quantidade de colaboradores inseridos
        """
        validas = [l for l in linhas if l["valido"]]
        if not validas:
            return 0

        db.add_all([
            Colaborador(
                nome=l["nome"],
                departamento=l["departamento"],
                tipo=TipoColaborador(l["tipo"]),
                empresa=l["empresa"],
            )
            for l in validas
        ])
        db.commit()

        print(f"[IMPORTACAO] {len(validas)} colaboradores importados")
        store_eventos.publicar(EventoDados.COLABORADORES_ALTERADOS, importados=len(validas))
        return len(validas)

    def resumo(self, linhas: List[dict]) -> dict:
        validos = sum(1 for l in linhas if l["valido"])
        return {
            "total": len(linhas),
            "validos": validos,
            "invalidos": len(linhas) - validos,
            "linhas": linhas,
        }

    def gerar_modelo(self) -> bytes:
        """Gera a planilha modelo com cabeçalho e três linhas de exemplo"""
        wb = Workbook()
        ws = wb.active
        ws.title = "Colaboradores"

        ws.append(COLUNAS)
        for linha in EXEMPLOS_MODELO:
            ws.append(linha)

        for celula in ws[1]:
            celula.font = Font(bold=True, color="FFFFFF")
            celula.fill = PatternFill("solid", fgColor="1E40AF")

        for letra, largura in zip("ABCD", (30, 20, 15, 25)):
            ws.column_dimensions[letra].width = largura

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()

    def _texto(self, valor) -> str:
        if valor is None:
            return ""
        return str(valor).strip()


# Instância singleton
importacao_service = ImportacaoService()
