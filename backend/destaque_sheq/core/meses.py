"""
Utilitários para o mês de referência no formato "AAAA-MM"
"""
import re
from datetime import date
from typing import Optional

MES_REGEX = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

NOMES_MESES = [
    "Janeiro", "Fevereiro", "Março", "Abril", "Maio", "Junho",
    "Julho", "Agosto", "Setembro", "Outubro", "Novembro", "Dezembro",
]


def validar_mes(mes: str) -> str:
    """Valida o formato AAAA-MM. Levanta ValueError se inválido."""
    if not isinstance(mes, str) or not MES_REGEX.match(mes):
        raise ValueError("Mês deve estar no formato AAAA-MM")
    return mes


def mes_atual(hoje: Optional[date] = None) -> str:
    hoje = hoje or date.today()
    return f"{hoje.year:04d}-{hoje.month:02d}"


def subtrair_meses(mes: str, quantidade: int) -> str:
    """subtrair_meses("2024-03", 6) -> "2023-09" """
    ano, num = (int(p) for p in mes.split("-"))
    total = ano * 12 + (num - 1) - quantidade
    return f"{total // 12:04d}-{total % 12 + 1:02d}"


def nome_mes(mes: str) -> str:
    """nome_mes("2024-01") -> "Janeiro" """
    return NOMES_MESES[int(mes.split("-")[1]) - 1]


def mes_por_extenso(mes: str) -> str:
    """mes_por_extenso("2024-01") -> "Janeiro/2024" """
    return f"{nome_mes(mes)}/{mes.split('-')[0]}"
