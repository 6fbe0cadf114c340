"""
Header Detector - Localiza a linha de cabeçalho em uma aba.

Planilhas de fornecedor costumam ter título, dados da fazenda e linhas em
branco antes do cabeçalho real. A linha de cabeçalho se distingue por ter
muito texto, palavras-chave de domínio e mais células preenchidas que as
linhas de título.
"""
import logging
from typing import Any, List, Optional, Sequence

from core.config import IngestConfig, get_config
from ingest.keywords import DEFAULT_RULES, KeywordRules
from ingest.money import parse_money
from ingest.normalization import cell_text, is_blank_row, normalize_text
from ingest.types import HeaderAssignment, Matrix

logger = logging.getLogger(__name__)


def score_header_row(
    row: Sequence[Any],
    config: IngestConfig,
    rules: KeywordRules = DEFAULT_RULES,
) -> Optional[int]:
    """
    Pontua a probabilidade de uma linha ser o cabeçalho.

    score = peso × (células com palavra-chave de cabeçalho)
            + (células que não são valores monetários)
            + min(limite, células preenchidas)

    Args:
        row: Células da linha
        config: Pesos e limites
        rules: Palavras-chave de cabeçalho

    Returns:
        Pontuação, ou None se a linha está vazia
    """
    values = [text for text in (cell_text(cell) for cell in row) if text]
    if not values:
        return None

    keyword_hits = sum(
        1 for value in values
        if any(keyword in normalize_text(value) for keyword in rules.header_keywords)
    )
    textish = sum(1 for value in values if parse_money(value, rules) is None)

    return (
        keyword_hits * config.header_keyword_weight
        + textish
        + min(len(values), config.header_density_cap)
    )


def find_header_row(
    matrix: Matrix,
    config: Optional[IngestConfig] = None,
    rules: KeywordRules = DEFAULT_RULES,
) -> int:
    """
    Índice da linha com maior pontuação entre as primeiras `header_scan_rows`.

    Empates mantêm a linha mais acima; sem linhas pontuadas, retorna 0.

    Args:
        matrix: Matriz de células da aba
        config: Configuração (usa get_config() se None)
        rules: Tabela de palavras-chave

    Returns:
        Índice (base 0) da linha de cabeçalho
    """
    config = config or get_config()
    best_index = 0
    best_score = -1

    for index, row in enumerate(matrix[:config.header_scan_rows]):
        score = score_header_row(row or [], config, rules)
        if score is None:
            continue
        if score > best_score:
            best_score = score
            best_index = index

    logger.debug(f"[HEADER_DETECTOR] Cabeçalho na linha {best_index} (score={best_score})")
    return best_index


def locate_header(
    matrix: Matrix,
    config: Optional[IngestConfig] = None,
    rules: KeywordRules = DEFAULT_RULES,
) -> Optional[HeaderAssignment]:
    """
    Localiza o cabeçalho e devolve os rótulos aparados.

    Sem linha pontuada nas primeiras `header_scan_rows`, a linha 0 é usada
    (possivelmente sem rótulos); os papéis saem então da amostra de dados.

    Returns:
        HeaderAssignment, ou None se a aba está vazia
    """
    if not matrix:
        return None

    index = find_header_row(matrix, config, rules)
    headers = [cell_text(cell) for cell in (matrix[index] or [])]
    return HeaderAssignment(header_row_index=index, headers=headers)


def data_rows_after(matrix: Matrix, header_row_index: int) -> List[List[Any]]:
    """Linhas abaixo do cabeçalho que têm ao menos uma célula preenchida."""
    return [
        list(row) for row in matrix[header_row_index + 1:]
        if row and not is_blank_row(row)
    ]
