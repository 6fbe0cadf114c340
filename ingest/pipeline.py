"""
Orquestrador do pipeline - Ingestão de uma planilha de cotação inteira.

Fluxo determinístico por aba:
1. Header detector → linha de cabeçalho
2. Column detector → papéis das colunas
3. Extractor → itens validados

Os itens de todas as abas são concatenados na ordem das abas; os resumos
por aba e por categoria são derivados desses itens. O único erro visível
ao chamador é "nenhum item válido em nenhuma aba".
"""
import logging
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from core.config import IngestConfig, get_config
from core.logger import get_request_context, log_json, set_request_context
from ingest.column_detector import detect_columns
from ingest.extractor import extract_items
from ingest.header_detector import data_rows_after, locate_header
from ingest.keywords import DEFAULT_RULES, KeywordRules
from ingest.summary import build_category_summary, build_sheet_summary, distinct_counts
from ingest.types import IngestionResult, RawSheet, SheetInput, coerce_sheets
from ingest.validation import ItemRow

logger = logging.getLogger(__name__)

NO_VALID_ITEMS_MESSAGE = (
    "Não foi possível identificar produtos com valor válido nas abas da planilha. "
    "Verifique cabeçalhos e valores."
)


def process_sheet(
    sheet: RawSheet,
    config: Optional[IngestConfig] = None,
    rules: KeywordRules = DEFAULT_RULES,
) -> Tuple[List[ItemRow], int]:
    """
    Processa uma aba: cabeçalho → papéis → itens.

    Args:
        sheet: Aba decodificada
        config: Configuração (usa get_config() se None)
        rules: Tabela de palavras-chave

    Returns:
        Tuple (itens, linhas de dados examinadas). Aba sem cabeçalho ou sem
        linhas de dados → ([], 0)
    """
    config = config or get_config()

    header = locate_header(sheet.rows, config, rules)
    if header is None:
        logger.info(f"[PIPELINE] Aba '{sheet.name}' ignorada: aba vazia")
        return [], 0

    data_rows = data_rows_after(sheet.rows, header.header_row_index)
    if not data_rows:
        logger.info(f"[PIPELINE] Aba '{sheet.name}' ignorada: sem linhas de dados")
        return [], 0

    roles = detect_columns(header.headers, data_rows, config, rules)
    items = extract_items(sheet.name, header.headers, data_rows, roles, config, rules)
    return items, len(data_rows)


def ingest_workbook(
    workbook: Union[Mapping[str, Any], Iterable[SheetInput]],
    config: Optional[IngestConfig] = None,
    rules: KeywordRules = DEFAULT_RULES,
    correlation_id: Optional[str] = None,
) -> IngestionResult:
    """
    Ingestão completa de uma planilha já decodificada.

    Função pura sobre as matrizes de células: mesma entrada, mesmos itens
    na mesma ordem.

    Args:
        workbook: Abas como lista de RawSheet, lista de pares (nome, linhas)
            ou mapeamento {nome: linhas}
        config: Configuração (usa get_config() se None)
        rules: Tabela de palavras-chave
        correlation_id: ID de correlação para os logs (gerado se None)

    Returns:
        IngestionResult com itens, resumos, métricas e erro (se nenhum item)
    """
    start_time = time.time()
    config = config or get_config()
    sheets = coerce_sheets(workbook)

    if correlation_id is not None or not get_request_context().get("correlation_id"):
        set_request_context(correlation_id=correlation_id)

    log_json(
        level='info',
        message=f"Ingestion started: {len(sheets)} sheet(s)",
        stage='ingest_workbook',
    )

    all_items: List[ItemRow] = []
    per_sheet: Dict[str, int] = {}
    rows_total = 0

    for sheet in sheets:
        items, examined = process_sheet(sheet, config, rules)
        rows_total += examined
        all_items.extend(items)
        per_sheet[sheet.name] = per_sheet.get(sheet.name, 0) + len(items)

    elapsed_sec = time.time() - start_time
    metrics: Dict[str, Any] = {
        'sheets_total': len(sheets),
        'sheets_used': sum(1 for count in per_sheet.values() if count > 0),
        'rows_total': rows_total,
        'rows_valid': len(all_items),
        'rows_rejected': rows_total - len(all_items),
        'elapsed_sec': elapsed_sec,
        'distinct': distinct_counts(all_items),
    }

    if not all_items:
        result = IngestionResult(error=NO_VALID_ITEMS_MESSAGE, metrics=metrics)
    else:
        result = IngestionResult(
            items=all_items,
            sheet_summary=build_sheet_summary(per_sheet),
            category_summary=build_category_summary(all_items, default=config.default_category),
            metrics=metrics,
        )

    log_json(
        level='info' if not result.failed else 'error',
        message=f"Ingestion completed: decision={result.decision}, items={len(result.items)}",
        stage='ingest_workbook',
        rows_total=metrics['rows_total'],
        rows_valid=metrics['rows_valid'],
        rows_rejected=metrics['rows_rejected'],
        elapsed_sec=elapsed_sec,
        decision=result.decision,
    )

    logger.info(
        f"[PIPELINE] Completed: decision={result.decision}, "
        f"sheets={metrics['sheets_used']}/{metrics['sheets_total']}, "
        f"items={metrics['rows_valid']}, elapsed={elapsed_sec:.2f}s"
    )
    return result
