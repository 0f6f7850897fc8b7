"""
Serviço de Exportação para Excel
Converte listas de linhas em planilhas .xlsx
"""
import io
from typing import List, Sequence
from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter


class ExcelService:
    """Serviço para gerar planilhas a partir de listas de linhas"""

    def gerar_planilha(self, linhas: Sequence[Sequence], titulo_aba: str = "Relatório") -> bytes:
        """
        Gera um .xlsx com uma linha por item de `linhas`.

        Linhas vazias são mantidas como separadores; a primeira linha sai em negrito.
        """
        wb = Workbook()
        ws = wb.active
        # Excel limita o nome da aba a 31 caracteres
        ws.title = titulo_aba[:31]

        for linha in linhas:
            ws.append(list(linha))

        if ws.max_row >= 1:
            for celula in ws[1]:
                celula.font = Font(bold=True, size=12)

        # Largura das colunas pelo maior conteúdo
        larguras: List[int] = []
        for linha in linhas:
            for i, valor in enumerate(linha):
                tamanho = len(str(valor)) if valor is not None else 0
                if i >= len(larguras):
                    larguras.append(tamanho)
                else:
                    larguras[i] = max(larguras[i], tamanho)
        for i, largura in enumerate(larguras):
            ws.column_dimensions[get_column_letter(i + 1)].width = min(max(largura + 2, 10), 50)

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


# Instância singleton
excel_service = ExcelService()
