"""
Serviço de Geração de Certificados
Desenha o certificado do Destaque SHEQ em PNG (800x600) a partir de um layout declarativo
"""
import io
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple, Union, List
from PIL import Image, ImageDraw, ImageFont
from destaque_sheq.config import settings
from destaque_sheq.core.meses import nome_mes
from destaque_sheq.models.colaborador import Colaborador, TipoColaborador

LARGURA = 800
ALTURA = 600

AZUL = "#1e40af"
AZUL_CLARO = "#3b82f6"
CINZA = "#6b7280"
CINZA_ESCURO = "#374151"

FONTE_REGULAR = "DejaVuSans.ttf"
FONTE_NEGRITO = "DejaVuSans-Bold.ttf"


@dataclass(frozen=True)
class Retangulo:
    """Contorno de retângulo (x, y, largura, altura)"""
    x: int
    y: int
    largura: int
    altura: int
    cor: str
    espessura: int


@dataclass(frozen=True)
class Linha:
    inicio: Tuple[int, int]
    fim: Tuple[int, int]
    cor: str
    espessura: int = 1


@dataclass(frozen=True)
class Texto:
    """
    Texto centralizado horizontalmente; `y` é a linha de base.

    `modelo` aceita os campos de contexto via str.format, ex: "{nome}".
    """
    modelo: str
    y: int
    tamanho: int
    cor: str
    negrito: bool = False


Elemento = Union[Retangulo, Linha, Texto]

LAYOUT_CERTIFICADO: List[Elemento] = [
    Retangulo(20, 20, LARGURA - 40, ALTURA - 40, AZUL, 8),
    Retangulo(40, 40, LARGURA - 80, ALTURA - 80, AZUL_CLARO, 2),
    Texto("CERTIFICADO DE DESTAQUE SHEQ", 120, 32, AZUL, negrito=True),
    Texto("ODFJELL TERMINALS", 160, 24, CINZA, negrito=True),
    Texto("Reconhecemos como destaque SHEQ do mês o {tipo}:", 220, 18, CINZA_ESCURO),
    Texto("{nome}", 280, 28, AZUL, negrito=True),
    Texto("{detalhe}", 310, 18, CINZA),
    Texto("Referente ao mês de {nome_mes} de {ano}", 350, 20, CINZA_ESCURO),
    Texto("Pelo comprometimento e excelência em", 400, 16, CINZA_ESCURO),
    Texto("Segurança, Saúde, Meio Ambiente e Qualidade", 425, 16, CINZA_ESCURO),
    Texto("{cidade}, {data}", 500, 14, CINZA),
    Linha((300, 540), (500, 540), CINZA, 1),
    Texto("Direção Odfjell Terminals", 560, 14, CINZA),
]


class CertificadoService:
    """Serviço para gerar certificados dos vencedores"""

    def __init__(self, layout: Optional[List[Elemento]] = None):
        self.layout = layout or LAYOUT_CERTIFICADO
        self._fontes = {}

    def contexto(self, colaborador: Colaborador, tipo: TipoColaborador, mes: str,
                 hoje: Optional[date] = None) -> dict:
        """Campos disponíveis para os textos do layout"""
        hoje = hoje or date.today()
        detalhe = (
            f"{colaborador.departamento} - {colaborador.empresa}"
            if colaborador.empresa else colaborador.departamento
        )
        return {
            "tipo": "FUNCIONÁRIO" if tipo == TipoColaborador.FUNCIONARIO else "TERCEIRIZADO",
            "nome": colaborador.nome.upper(),
            "detalhe": detalhe,
            "nome_mes": nome_mes(mes),
            "ano": mes.split("-")[0],
            "cidade": settings.CERTIFICADO_CIDADE,
            "data": hoje.strftime("%d/%m/%Y"),
        }

    def nome_arquivo(self, colaborador: Colaborador, mes: str) -> str:
        """certificado-sheq-Maria-Santos-2024-01.png"""
        nome = re.sub(r"\s+", "-", colaborador.nome)
        return f"certificado-sheq-{nome}-{mes}.png"

    def gerar(self, colaborador: Colaborador, tipo: TipoColaborador, mes: str,
              hoje: Optional[date] = None) -> bytes:
        """
        Renderiza o certificado

        Returns:
            Bytes do PNG gerado
        """
        contexto = self.contexto(colaborador, tipo, mes, hoje)

        imagem = Image.new("RGB", (LARGURA, ALTURA), "#ffffff")
        draw = ImageDraw.Draw(imagem)

        for elemento in self.layout:
            if isinstance(elemento, Retangulo):
                self._desenhar_retangulo(draw, elemento)
            elif isinstance(elemento, Linha):
                draw.line([elemento.inicio, elemento.fim], fill=elemento.cor, width=elemento.espessura)
            elif isinstance(elemento, Texto):
                self._desenhar_texto(draw, elemento, elemento.modelo.format(**contexto))

        buffer = io.BytesIO()
        imagem.save(buffer, format="PNG")
        return buffer.getvalue()

    def _desenhar_retangulo(self, draw: ImageDraw.ImageDraw, ret: Retangulo):
        # Contorno centrado na borda do retângulo
        meia = ret.espessura // 2
        draw.rectangle(
            [ret.x - meia, ret.y - meia, ret.x + ret.largura + meia, ret.y + ret.altura + meia],
            outline=ret.cor,
            width=ret.espessura,
        )

    def _desenhar_texto(self, draw: ImageDraw.ImageDraw, texto: Texto, conteudo: str):
        fonte = self._fonte(texto.tamanho, texto.negrito)
        if isinstance(fonte, ImageFont.FreeTypeFont):
            draw.text((LARGURA / 2, texto.y), conteudo, font=fonte, fill=texto.cor, anchor="ms")
        else:
            largura = draw.textlength(conteudo, font=fonte)
            draw.text((LARGURA / 2 - largura / 2, texto.y - texto.tamanho), conteudo, font=fonte, fill=texto.cor)

    def _fonte(self, tamanho: int, negrito: bool):
        chave = (tamanho, negrito)
        if chave not in self._fontes:
            try:
                self._fontes[chave] = ImageFont.truetype(FONTE_NEGRITO if negrito else FONTE_REGULAR, tamanho)
            except OSError:
                self._fontes[chave] = ImageFont.load_default(size=tamanho)
        return self._fontes[chave]


# Instância singleton
certificado_service = CertificadoService()
