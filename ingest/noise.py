"""
Filtro de ruído - decide se um candidato a nome de produto é dado real.

Planilhas de cotação misturam produtos com totais, observações, linhas de
assinatura, números soltos e rótulos de unidade. Essas linhas são
descartadas antes de procurar o preço.
"""
import re
from typing import Any

from ingest.keywords import DEFAULT_RULES, KeywordRules
from ingest.normalization import cell_text, normalize_text


def is_noise_product(
    candidate: Any,
    rules: KeywordRules = DEFAULT_RULES,
    max_length: int = 120,
    max_unit_words: int = 3,
) -> bool:
    """
    Verifica se o texto da coluna de produto NÃO é um produto.

    Ruído se:
    - vazio após aparar
    - mais longo que `max_length`
    - só pontuação/separadores ("-----", "===")
    - só dígitos e pontuação numérica ("1.234,00", "12")
    - contém palavra de anotação (observação, nota, resumo, legenda, ...)
    - contém palavra de fechamento (total, subtotal, soma, assinatura, ...)
    - é um rótulo de unidade curto ("sacas/ha", "kg/ha") com até
      `max_unit_words` palavras

    Comparações de palavras-chave ignoram acentos e maiúsculas.

    Args:
        candidate: Valor da célula de produto
        rules: Tabela de padrões
        max_length: Comprimento máximo aceito
        max_unit_words: Palavras máximas de um rótulo de unidade

    Returns:
        True se a linha deve ser descartada
    """
    value = cell_text(candidate)
    if not value:
        return True

    if len(value) > max_length:
        return True
    if re.match(rules.punctuation_only, value):
        return True
    if re.match(rules.numeric_only, value):
        return True

    normalized = normalize_text(value)
    if re.search(rules.admin_note, normalized):
        return True
    if re.search(rules.closing_note, normalized):
        return True
    if re.search(rules.unit_phrase, normalized) and len(value.split(' ')) <= max_unit_words:
        return True

    return False
