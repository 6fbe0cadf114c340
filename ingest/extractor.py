"""
Item Extractor - Converte as linhas de dados de uma aba em itens validados.

Para cada linha: descarta ruído, compõe o nome do produto, tenta as colunas
candidatas a preço em ordem até achar um valor > 0, deriva a unidade da
coluna usada e valida o item. Uma linha é aceita inteira ou descartada.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from core.config import IngestConfig, get_config
from ingest.keywords import DEFAULT_RULES, HeaderMatcher, KeywordRules
from ingest.money import parse_positive_money
from ingest.noise import is_noise_product
from ingest.normalization import cell_at, column_count, normalize_category, normalize_text
from ingest.types import ColumnRoles
from ingest.unit_inference import infer_price_unit
from ingest.validation import ItemRow, validate_batch

logger = logging.getLogger(__name__)


def _raw_at(row: Sequence[Any], index: int) -> Any:
    return row[index] if 0 <= index < len(row) else None


def rank_price_candidates(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    roles: ColumnRoles,
    config: Optional[IngestConfig] = None,
    rules: KeywordRules = DEFAULT_RULES,
) -> List[int]:
    """
    Colunas candidatas a preço, em ordem de tentativa.

    1. coluna de preço resolvida
    2. outras colunas com cabeçalho monetário (valor, preço, custo, R$)
    3. colunas com pelo menos `min_numeric_hits` valores > 0 nas primeiras
       `candidate_sample_rows` linhas

    Colunas de produto, fornecedor e categoria só entram como coluna
    resolvida (passo 1).

    Args:
        headers: Rótulos do cabeçalho
        rows: Linhas de dados
        roles: Papéis detectados

    Returns:
        Índices das colunas candidatas
    """
    config = config or get_config()
    normalized = [normalize_text(header) for header in headers]
    excluded = roles.identity_columns()
    candidates = [roles.price]

    for index, header in enumerate(normalized):
        if index in excluded or index in candidates:
            continue
        if rules.money_header.matches(header):
            candidates.append(index)

    sample = list(rows)[:config.candidate_sample_rows]
    for index in range(column_count(normalized, sample)):
        if index in excluded or index in candidates:
            continue
        hits = sum(1 for row in sample if parse_positive_money(_raw_at(row, index), rules) is not None)
        if hits >= config.min_numeric_hits:
            candidates.append(index)

    return candidates


def find_auxiliary_column(
    headers: Sequence[str],
    matcher: HeaderMatcher,
    taken: Set[int],
    rules: KeywordRules = DEFAULT_RULES,
) -> Optional[int]:
    """
    Primeira coluna auxiliar (embalagem, finalidade) que casa com a regra.

    Colunas com papel já resolvido e colunas monetárias nunca são auxiliares.
    """
    for index, header in enumerate(headers):
        normalized = normalize_text(header)
        if index in taken or rules.money_header.matches(normalized):
            continue
        if matcher.matches(normalized):
            return index
    return None


def resolve_price(
    row: Sequence[Any],
    candidates: Sequence[int],
    rules: KeywordRules = DEFAULT_RULES,
) -> Tuple[Optional[Decimal], Optional[int]]:
    """
    Primeiro valor > 0 entre as colunas candidatas.

    Returns:
        Tuple (valor, coluna usada) ou (None, None)
    """
    for index in candidates:
        value = parse_positive_money(_raw_at(row, index), rules)
        if value is not None:
            return value, index
    return None, None


def compose_product_label(base: str, volume: str = '', purpose: str = '') -> str:
    """'Glifosato' + '20 L' + 'Dessecação' → 'Glifosato [20 L] - Dessecação'."""
    parts = [base, f"[{volume}]" if volume else '', f"- {purpose}" if purpose else '']
    return ' '.join(part for part in parts if part).strip()


def extract_items(
    sheet_name: str,
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    roles: ColumnRoles,
    config: Optional[IngestConfig] = None,
    rules: KeywordRules = DEFAULT_RULES,
) -> List[ItemRow]:
    """
    Extrai itens validados das linhas de dados de uma aba.

    Args:
        sheet_name: Nome da aba (categoria padrão quando não há coluna de categoria)
        headers: Rótulos do cabeçalho
        rows: Linhas de dados (sem o cabeçalho)
        roles: Papéis detectados
        config: Configuração (usa get_config() se None)
        rules: Tabela de palavras-chave

    Returns:
        Itens válidos na ordem das linhas
    """
    config = config or get_config()
    candidates = rank_price_candidates(headers, rows, roles, config, rules)
    taken = roles.resolved_columns()
    volume_col = find_auxiliary_column(headers, rules.volume, taken, rules)
    purpose_col = find_auxiliary_column(headers, rules.purpose, taken, rules)

    logger.debug(
        f"[EXTRACTOR] Aba '{sheet_name}': candidatas a preço={candidates}, "
        f"embalagem={volume_col}, finalidade={purpose_col}"
    )

    items_data: List[Dict[str, Any]] = []
    noise_rows = 0
    unpriced_rows = 0

    for row in rows:
        base = cell_at(row, roles.product)
        if is_noise_product(
            base,
            rules,
            max_length=config.max_product_length,
            max_unit_words=config.max_unit_phrase_words,
        ):
            noise_rows += 1
            continue

        valor, used_col = resolve_price(row, candidates, rules)
        if valor is None:
            unpriced_rows += 1
            continue

        header_label = headers[used_col] if used_col < len(headers) else ''
        category_cell = cell_at(row, roles.category)

        items_data.append({
            'produto': compose_product_label(base, cell_at(row, volume_col), cell_at(row, purpose_col)),
            'fornecedor': cell_at(row, roles.supplier),
            'categoria': normalize_category(category_cell or sheet_name, default=config.default_category),
            'valor': valor,
            'dose': cell_at(row, roles.dose),
            'unidade': infer_price_unit(header_label, row, roles.unit, config, rules),
        })

    items, _, stats = validate_batch(items_data)

    logger.info(
        f"[EXTRACTOR] Aba '{sheet_name}': {len(items)}/{len(rows)} linhas aceitas "
        f"(ruído={noise_rows}, sem preço={unpriced_rows}, inválidas={stats['rows_rejected']})"
    )
    return items
