"""
Normalização de células e textos.

Converte valores brutos das células (texto, número, vazio, NaN do pandas)
em texto, normaliza cabeçalhos para comparação sem acentos e padroniza
categorias em Title Case.
"""
import math
import re
import unicodedata
from typing import Any, Optional, Sequence

import pandas as pd

_NUMBER_LITERAL = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)\s*$")


def is_na(value: Any) -> bool:
    """
    Verifica se a célula está vazia (None, NaN, NaT, pd.NA ou texto em branco).

    Args:
        value: Valor da célula

    Returns:
        True se a célula não tem conteúdo
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    if isinstance(value, float):
        return math.isnan(value)
    if pd.api.types.is_scalar(value):
        return bool(pd.isna(value))
    return False


def cell_text(value: Any) -> str:
    """
    Texto aparado de uma célula.

    Floats inteiros perdem o '.0' que o pandas introduz ao ler colunas
    numéricas (350.0 → '350').

    Args:
        value: Valor da célula

    Returns:
        Texto da célula ('' se vazia)
    """
    if is_na(value):
        return ''
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def cell_at(row: Sequence[Any], index: Optional[int]) -> str:
    """Texto da célula na coluna `index`; '' se a coluna não existe na linha."""
    if index is None or index < 0 or index >= len(row):
        return ''
    return cell_text(row[index])


def normalize_text(text: Any) -> str:
    """
    Normaliza texto para comparação: minúsculas, sem acentos, aparado.

    Args:
        text: Texto ou valor de célula

    Returns:
        Texto normalizado ('Preço/ha' → 'preco/ha')
    """
    if is_na(text):
        return ''
    normalized = unicodedata.normalize('NFD', str(text).lower())
    normalized = ''.join(ch for ch in normalized if unicodedata.category(ch) != 'Mn')
    return normalized.strip()


def column_count(headers: Sequence[Any], rows: Sequence[Sequence[Any]]) -> int:
    """Largura da aba: cabeçalho ou linha de dados mais longa."""
    return max([len(headers)] + [len(row) for row in rows])


def is_blank_row(row: Sequence[Any]) -> bool:
    """True se nenhuma célula da linha tem conteúdo."""
    return all(cell_text(cell) == '' for cell in row)


def looks_numeric(text: str) -> bool:
    """
    Verifica se o texto é um número simples (vírgula aceita como decimal).

    Usado para distinguir colunas de texto de colunas numéricas na amostra.
    Texto vazio conta como numérico (não prova que a coluna é de texto).
    """
    if not text.strip():
        return True
    return _NUMBER_LITERAL.match(text.replace(',', '.', 1)) is not None


def normalize_category(raw: Any, default: str = "Insumo") -> str:
    """
    Normaliza categoria em Title Case preservando o texto da planilha.

    Exemplos:
    - "HERBICIDA" → "Herbicida"
    - "tratamento de sementes" → "Tratamento De Sementes"
    - "" → default

    Args:
        raw: Valor original
        default: Categoria quando o valor está vazio

    Returns:
        Categoria normalizada
    """
    value = cell_text(raw)
    if not value:
        value = default
    return re.sub(r"\S+", lambda m: m.group(0)[:1].upper() + m.group(0)[1:].lower(), value)
