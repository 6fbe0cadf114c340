"""
Inferência da unidade do preço.

O preço de cada linha pode vir de colunas diferentes (vários fornecedores
na mesma aba, colunas por hectare e por litro), então a unidade é derivada
do cabeçalho da coluna que efetivamente forneceu o valor daquela linha.
"""
from typing import Any, Optional, Sequence

from core.config import IngestConfig, get_config
from ingest.keywords import DEFAULT_RULES, KeywordRules
from ingest.normalization import cell_at, normalize_text


def infer_price_unit(
    header_label: str,
    row: Sequence[Any],
    unit_column: Optional[int],
    config: Optional[IngestConfig] = None,
    rules: KeywordRules = DEFAULT_RULES,
) -> str:
    """
    Rótulo da unidade do preço ("R$/ha", "R$/L", "R$/kg", ...).

    Ordem: regras de cabeçalho (hectare, litro, quilo, saca, unidade,
    total); texto da coluna de unidade da linha; unidade padrão.

    Args:
        header_label: Cabeçalho da coluna que forneceu o preço
        row: Células da linha
        unit_column: Coluna de unidade (None se não detectada)
        config: Configuração (moeda e unidade padrão)
        rules: Regras de rótulo

    Returns:
        Rótulo da unidade
    """
    config = config or get_config()
    header = normalize_text(header_label)

    for rule in rules.unit_labels:
        if rule.matches(header):
            return f"{config.currency_label}{rule.suffix}"

    from_column = cell_at(row, unit_column)
    if from_column:
        return from_column

    return config.default_unit_label()
