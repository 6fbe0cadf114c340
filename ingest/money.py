"""
Parser de valores monetários.

Converte o valor bruto de uma célula (número ou texto em formato local
ambíguo) em Decimal. Convenção fixa do locale pt-BR: com vírgula e ponto
presentes, o ponto é separador de milhar e a vírgula é decimal.
"""
import numbers
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ingest.keywords import DEFAULT_RULES, KeywordRules


def _to_decimal(text: str) -> Optional[Decimal]:
    try:
        value = Decimal(text)
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None


def parse_money(raw: Any, rules: KeywordRules = DEFAULT_RULES) -> Optional[Decimal]:
    """
    Converte valor de célula em Decimal.

    Regras:
    - Número finito passa direto; NaN/inf falham
    - Texto: remove marcadores de moeda (R$, RS$, USD, BRL), espaços e
      qualquer caractere fora de dígitos, vírgula, ponto e sinal
    - Vírgula e ponto: remove os pontos, a última vírgula vira decimal
      ("1.234,56" → 1234.56)
    - Só vírgula: vírgula decimal ("1234,56" → 1234.56)
    - Caso contrário: literal decimal padrão ("45.00" → 45.00)

    Args:
        raw: Valor original (str, int, float, Decimal, None)
        rules: Tabela com os marcadores de moeda

    Returns:
        Decimal finito ou None se o valor não é monetário
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, numbers.Number):
        return _to_decimal(str(raw))

    text = str(raw).strip()
    if not text:
        return None

    cleaned = re.sub(rules.currency_markers, '', text, flags=re.IGNORECASE)
    cleaned = re.sub(r"\s+", '', cleaned)
    cleaned = re.sub(r"[^0-9,.\-]", '', cleaned)
    if not cleaned:
        return None

    if ',' in cleaned and '.' in cleaned:
        head, _, tail = cleaned.replace('.', '').rpartition(',')
        cleaned = f"{head}.{tail}"
    elif ',' in cleaned:
        cleaned = cleaned.replace(',', '.')

    return _to_decimal(cleaned)


def parse_positive_money(raw: Any, rules: KeywordRules = DEFAULT_RULES) -> Optional[Decimal]:
    """Como parse_money, mas só aceita valores > 0."""
    value = parse_money(raw, rules)
    if value is None or value <= 0:
        return None
    return value
