"""
Serviço de Geração de PDF
Relatório mensal do Destaque SHEQ (participação, vencedores e rankings)
"""
import io
from datetime import datetime
from typing import List
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas
from destaque_sheq.core.meses import mes_por_extenso

MARGEM_INFERIOR = 70


class PDFService:
    """Serviço para geração do relatório mensal em PDF"""

    def gerar_relatorio_mensal(self, relatorio: dict) -> bytes:
        """
        Gera o PDF do relatório mensal

        Args:
            relatorio: Dict no formato de RelatorioMensalResponse

        Returns:
            Bytes do PDF gerado
        """
        buffer = io.BytesIO()

        c = canvas.Canvas(buffer, pagesize=A4)
        width, height = A4
        c.setTitle(f"Relatório Destaque SHEQ {relatorio['mes']}")

        self._draw_header(c, width, height, relatorio["mes"])
        y = self._draw_estatisticas(c, width, height - 110, relatorio["estatisticas"])
        y = self._draw_vencedores(c, width, y, relatorio.get("resultado"))
        y = self._draw_ranking(c, width, height, y, "RANKING FUNCIONÁRIOS", relatorio["ranking_funcionarios"])
        self._draw_ranking(c, width, height, y, "RANKING TERCEIRIZADOS", relatorio["ranking_terceirizados"])
        self._draw_footer(c, width)

        c.save()
        buffer.seek(0)
        return buffer.getvalue()

    def _draw_header(self, c: canvas.Canvas, width: float, height: float, mes: str):
        """Desenha o cabeçalho do PDF"""
        # Fundo azul do header
        c.setFillColor(colors.HexColor('#1e40af'))
        c.rect(0, height - 80, width, 80, fill=True, stroke=False)

        c.setFillColor(colors.white)
        c.setFont("Helvetica-Bold", 20)
        c.drawCentredString(width / 2, height - 40, "RELATÓRIO DESTAQUE SHEQ")

        c.setFont("Helvetica", 12)
        c.drawCentredString(width / 2, height - 60, mes_por_extenso(mes))

        c.setFont("Helvetica", 9)
        c.setFillColor(colors.HexColor('#666666'))
        data_hoje = datetime.now().strftime('%d/%m/%Y às %H:%M')
        c.drawRightString(width - 20, height - 95, f"Emitido em: {data_hoje}")

    def _draw_estatisticas(self, c: canvas.Canvas, width: float, y: float, est: dict) -> float:
        """Box com os números de participação"""
        c.setStrokeColor(colors.HexColor('#e5e7eb'))
        c.setFillColor(colors.HexColor('#f9fafb'))
        c.roundRect(20, y - 60, width - 40, 60, 5, fill=True, stroke=True)

        blocos = [
            ("Total de votos", str(est["total_votos"])),
            ("Eleitores", str(est["total_eleitores"])),
            ("Votaram", str(est["eleitores_votantes"])),
            ("Participação", f"{est['taxa_participacao']}%"),
        ]
        largura = (width - 40) / len(blocos)
        for i, (rotulo, valor) in enumerate(blocos):
            x = 20 + largura * i + largura / 2
            c.setFillColor(colors.HexColor('#1e40af'))
            c.setFont("Helvetica-Bold", 16)
            c.drawCentredString(x, y - 30, valor)
            c.setFillColor(colors.HexColor('#6b7280'))
            c.setFont("Helvetica", 9)
            c.drawCentredString(x, y - 48, rotulo)

        return y - 90

    def _draw_vencedores(self, c: canvas.Canvas, width: float, y: float, resultado) -> float:
        c.setFillColor(colors.HexColor('#059669'))
        c.setFont("Helvetica-Bold", 12)
        c.drawString(20, y, "VENCEDORES")
        y -= 20

        if not resultado:
            c.setFillColor(colors.HexColor('#666666'))
            c.setFont("Helvetica-Oblique", 10)
            c.drawString(30, y, "Resultado ainda não apurado para este mês.")
            return y - 30

        for rotulo, chave in (("Funcionário", "funcionario"), ("Terceirizado", "terceirizado")):
            vencedor = resultado.get(chave)
            c.setFillColor(colors.HexColor('#333333'))
            c.setFont("Helvetica-Bold", 10)
            c.drawString(30, y, f"{rotulo}:")
            c.setFont("Helvetica", 10)
            if vencedor:
                texto = (f"{vencedor['colaborador'].nome} - {vencedor['total_votos']} votos, "
                         f"{vencedor['total_sim']} respostas sim")
                if vencedor["empate"]:
                    texto += " (empate)"
            else:
                texto = "Sem vencedor"
            c.drawString(110, y, texto)
            y -= 16

        return y - 20

    def _draw_ranking(self, c: canvas.Canvas, width: float, height: float, y: float,
                      titulo: str, itens: List[dict]) -> float:
        """Desenha a tabela de ranking de uma categoria (quebra página se preciso)"""
        if y < MARGEM_INFERIOR + 60:
            c.showPage()
            y = height - 50

        c.setFillColor(colors.HexColor('#059669'))
        c.setFont("Helvetica-Bold", 12)
        c.drawString(20, y, titulo)
        y -= 25

        y = self._draw_cabecalho_tabela(c, width, y)

        if not itens:
            c.setFillColor(colors.HexColor('#666666'))
            c.setFont("Helvetica-Oblique", 9)
            c.drawString(25, y - 10, "Nenhum voto registrado.")
            return y - 40

        c.setFont("Helvetica", 9)
        for i, item in enumerate(itens, 1):
            if y < MARGEM_INFERIOR:
                c.showPage()
                y = self._draw_cabecalho_tabela(c, width, height - 50)
                c.setFont("Helvetica", 9)

            # Alternar cor de fundo
            if i % 2 == 0:
                c.setFillColor(colors.HexColor('#f3f4f6'))
                c.rect(20, y - 15, width - 40, 18, fill=True, stroke=False)

            c.setFillColor(colors.HexColor('#333333'))
            c.drawString(25, y - 10, str(item["posicao"]))

            nome = item["colaborador_nome"]
            if len(nome) > 40:
                nome = nome[:37] + "..."
            c.drawString(50, y - 10, nome)

            detalhe = item.get("empresa") or item.get("departamento") or ""
            if len(detalhe) > 30:
                detalhe = detalhe[:27] + "..."
            c.drawString(280, y - 10, detalhe)

            c.drawRightString(width - 90, y - 10, str(item["total_votos"]))
            c.drawRightString(width - 30, y - 10, str(item["total_sim"]))
            y -= 20

        return y - 20

    def _draw_cabecalho_tabela(self, c: canvas.Canvas, width: float, y: float) -> float:
        c.setFillColor(colors.HexColor('#3b82f6'))
        c.rect(20, y - 20, width - 40, 20, fill=True, stroke=False)

        c.setFillColor(colors.white)
        c.setFont("Helvetica-Bold", 9)
        c.drawString(25, y - 15, "#")
        c.drawString(50, y - 15, "Colaborador")
        c.drawString(280, y - 15, "Departamento / Empresa")
        c.drawRightString(width - 90, y - 15, "Votos")
        c.drawRightString(width - 30, y - 15, "Sim")
        return y - 25

    def _draw_footer(self, c: canvas.Canvas, width: float):
        """Desenha o rodapé do PDF"""
        c.setFillColor(colors.HexColor('#666666'))
        c.setFont("Helvetica", 8)
        c.drawCentredString(width / 2, 40, "Destaque SHEQ - Odfjell Terminals")
        c.drawCentredString(width / 2, 28, "Segurança, Saúde, Meio Ambiente e Qualidade")


# Instância singleton
pdf_service = PDFService()
