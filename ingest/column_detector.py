"""
Column Detector - Atribui papéis semânticos às colunas.

Dado o cabeçalho e uma amostra das linhas de dados, decide qual coluna é o
produto, o fornecedor, a categoria, o preço, a dose e a unidade. Cada papel
é resolvido por uma lista de regras em ordem de prioridade; a primeira regra
que devolve uma coluna vence.

Papéis são resolvidos de forma independente: a mesma coluna pode receber
mais de um papel se os cabeçalhos forem ambíguos.
"""
import logging
import re
from typing import Any, Callable, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz, process

from core.config import IngestConfig, get_config
from ingest.keywords import DEFAULT_RULES, HeaderMatcher, KeywordRules, first_match
from ingest.money import parse_positive_money
from ingest.normalization import cell_at, column_count, looks_numeric, normalize_text
from ingest.types import ColumnRoles

logger = logging.getLogger(__name__)

Rule = Tuple[str, Callable[[], Optional[int]]]


def _first_rule(role: str, rules: List[Rule]) -> Tuple[Optional[int], Optional[str]]:
    for name, rule in rules:
        index = rule()
        if index is not None:
            logger.debug(f"[COLUMN_DETECTOR] {role} -> coluna {index} (regra '{name}')")
            return index, name
    return None, None


def _raw_at(row: Sequence[Any], index: int) -> Any:
    return row[index] if 0 <= index < len(row) else None


def fuzzy_match(
    headers: List[str],
    matchers: Tuple[HeaderMatcher, ...],
    threshold: Optional[float],
) -> Optional[int]:
    """
    Primeiro cabeçalho com uma palavra parecida com uma palavra-chave.

    Tolera erros de digitação ("fornecdor", "categria"). Só usa as
    palavras alfabéticas com 4+ letras das regras simples (sem `also`);
    exclusões continuam valendo.

    Args:
        headers: Cabeçalhos normalizados
        matchers: Regras do papel
        threshold: Similaridade mínima 0-1 (None desativa)

    Returns:
        Índice da coluna ou None
    """
    if threshold is None:
        return None

    keywords = [
        word
        for matcher in matchers if not matcher.also
        for word in matcher.any_of if word.isalpha() and len(word) >= 4
    ]
    if not keywords:
        return None

    for index, header in enumerate(headers):
        if any(matcher.excludes(header) for matcher in matchers):
            continue
        for token in re.findall(r"[a-z]{4,}", header):
            result = process.extractOne(
                token,
                keywords,
                scorer=fuzz.ratio,
                score_cutoff=threshold * 100
            )
            if result:
                matched, score, _ = result
                logger.info(
                    f"[COLUMN_DETECTOR] Cabeçalho '{header}' associado por similaridade a "
                    f"'{matched}' (score={score / 100:.2f})"
                )
                return index
    return None


def _first_text_column(width: int, sample: List[Sequence[Any]]) -> Optional[int]:
    for index in range(width):
        values = [cell_at(row, index) for row in sample]
        if any(not looks_numeric(value) for value in values):
            return index
    return None


def _first_numeric_column(
    width: int,
    sample: List[Sequence[Any]],
    skip: set,
    config: IngestConfig,
    rules: KeywordRules,
) -> Optional[int]:
    for index in range(width):
        if index in skip:
            continue
        hits = sum(1 for row in sample if parse_positive_money(_raw_at(row, index), rules) is not None)
        if hits >= config.min_numeric_hits:
            return index
    return None


def detect_columns(
    headers: Sequence[str],
    sample_rows: Sequence[Sequence[Any]],
    config: Optional[IngestConfig] = None,
    rules: KeywordRules = DEFAULT_RULES,
) -> ColumnRoles:
    """
    Atribui papéis às colunas a partir dos cabeçalhos e de uma amostra.

    Ordem das regras por papel:
    - product: cabeçalho de nome/produto/item/descrição (sem dose/preço/total);
      similaridade (se ativa); primeira coluna com texto na amostra; coluna 0
    - supplier / category: cabeçalho por palavra-chave; similaridade (se ativa)
    - price: (a) cabeçalho por hectare sem 'total'; (b) palavra de preço +
      'ha' sem 'total'; (c) palavra de preço sem 'total'; (d) primeira coluna
      numérica (exceto produto) com valores > 0 na amostra, preferindo colunas
      que não sejam fornecedor/categoria; senão `price_fallback_column`
    - dose / unit: cabeçalho por palavra-chave

    Args:
        headers: Rótulos do cabeçalho
        sample_rows: Linhas de dados (só as primeiras `role_sample_rows` são usadas)
        config: Configuração (usa get_config() se None)
        rules: Tabela de palavras-chave

    Returns:
        ColumnRoles
    """
    config = config or get_config()
    normalized = [normalize_text(header) for header in headers]
    sample = [list(row) for row in list(sample_rows)[:config.role_sample_rows]]
    width = column_count(normalized, sample)
    threshold = config.fuzzy_header_threshold

    product, _ = _first_rule('product', [
        ('header', lambda: first_match(normalized, rules.product)),
        ('fuzzy', lambda: fuzzy_match(normalized, rules.product, threshold)),
        ('text_sample', lambda: _first_text_column(width, sample)),
    ])
    if product is None:
        product = 0

    supplier, _ = _first_rule('supplier', [
        ('header', lambda: first_match(normalized, rules.supplier)),
        ('fuzzy', lambda: fuzzy_match(normalized, rules.supplier, threshold)),
    ])
    category, _ = _first_rule('category', [
        ('header', lambda: first_match(normalized, rules.category)),
        ('fuzzy', lambda: fuzzy_match(normalized, rules.category, threshold)),
    ])

    price_rules: List[Rule] = [
        (f'tier_{tier}', lambda matcher=matcher: first_match(normalized, (matcher,)))
        for tier, matcher in zip('abc', rules.price_tiers)
    ]
    price_rules.append((
        'numeric_sample',
        lambda: _first_numeric_column(
            width, sample, {product, supplier, category}, config, rules
        )
    ))
    price_rules.append((
        'numeric_sample_any',
        lambda: _first_numeric_column(width, sample, {product}, config, rules)
    ))
    price, price_rule = _first_rule('price', price_rules)
    if price is None:
        price = config.price_fallback_column
        logger.debug(f"[COLUMN_DETECTOR] price -> coluna padrão {price}")

    dose, _ = _first_rule('dose', [('header', lambda: first_match(normalized, rules.dose))])
    unit, _ = _first_rule('unit', [('header', lambda: first_match(normalized, rules.unit))])

    roles = ColumnRoles(
        product=product,
        price=price,
        supplier=supplier,
        category=category,
        dose=dose,
        unit=unit,
    )
    logger.info(
        f"[COLUMN_DETECTOR] Papéis detectados: {roles.as_dict()} "
        f"(preço via '{price_rule or 'default'}')"
    )
    return roles
