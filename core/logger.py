"""
Logging estruturado para cotacao-ingest.

Unifica logging colorido (colorlog) e logging estruturado em JSON com
correlation ID por execução.
"""
import contextvars
import json
import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import colorlog

from core.config import get_config

# Context variables para rastrear execuções
_request_context: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar('request_context', default={})


def setup_colored_logging(service_name: Optional[str] = None, level: Optional[str] = None):
    """
    Configura logging colorido com colorlog.

    Args:
        service_name: Nome do serviço para identificar os logs (padrão: config.service_name)
        level: Nível do root logger, 'DEBUG', 'INFO', ... (padrão: config.log_level)

    Returns:
        Root logger configurado
    """
    config = get_config()
    service_name = service_name or config.service_name
    level = level or config.log_level

    handler = colorlog.StreamHandler(sys.stdout)
    handler.setLevel(logging.DEBUG)

    formatter = colorlog.ColoredFormatter(
        f'%(log_color)s[%(levelname)s]%(reset)s %(cyan)s{service_name}%(reset)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        reset=True,
        log_colors={
            'DEBUG': 'white',
            'INFO': 'blue',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        },
        secondary_log_colors={},
        style='%'
    )
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove handlers existentes
    root_logger.handlers = []
    root_logger.addHandler(handler)

    return root_logger


def set_request_context(correlation_id: Optional[str] = None, user_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Define o contexto da execução para o logging estruturado.

    Args:
        correlation_id: ID de correlação (gerado se None)
        user_id: Usuário que enviou a planilha (opcional)

    Returns:
        Contexto definido
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())

    context: Dict[str, Any] = {"correlation_id": correlation_id}
    if user_id is not None:
        context["user_id"] = user_id

    _request_context.set(context)
    return context


def get_request_context() -> Dict[str, Any]:
    """Recupera o contexto da execução corrente."""
    return _request_context.get({})


def get_correlation_id() -> Optional[str]:
    """Recupera o correlation ID do contexto, se houver."""
    return get_request_context().get("correlation_id")


def log_json(
    level: str,
    message: str,
    correlation_id: Optional[str] = None,
    stage: Optional[str] = None,
    sheet: Optional[str] = None,
    rows_total: Optional[int] = None,
    rows_valid: Optional[int] = None,
    rows_rejected: Optional[int] = None,
    elapsed_sec: Optional[float] = None,
    decision: Optional[str] = None,
    **extra
) -> Dict[str, Any]:
    """
    Log estruturado em formato JSON (uma linha por evento).

    Args:
        level: 'info', 'warning', 'error', 'debug'
        message: Mensagem
        correlation_id: ID de correlação (usa o contexto se None)
        stage: Etapa do pipeline
        sheet: Nome da aba processada
        rows_total: Linhas de dados examinadas
        rows_valid: Itens válidos
        rows_rejected: Linhas descartadas
        elapsed_sec: Tempo de processamento em segundos
        decision: Decisão do pipeline ('save' / 'error')
        **extra: Campos adicionais

    Returns:
        Dict serializado (útil para testes)
    """
    ctx = get_request_context()
    if correlation_id is None:
        correlation_id = ctx.get("correlation_id")

    log_data: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level.upper(),
        "message": message,
    }

    if correlation_id:
        log_data["correlation_id"] = correlation_id
    if ctx.get("user_id") is not None:
        log_data["user_id"] = ctx["user_id"]
    if stage:
        log_data["stage"] = stage
    if sheet is not None:
        log_data["sheet"] = sheet

    # Métricas
    if rows_total is not None:
        log_data["rows_total"] = rows_total
    if rows_valid is not None:
        log_data["rows_valid"] = rows_valid
    if rows_rejected is not None:
        log_data["rows_rejected"] = rows_rejected
    if elapsed_sec is not None:
        log_data["elapsed_sec"] = elapsed_sec
    if decision:
        log_data["decision"] = decision

    log_data.update(extra)

    logger = logging.getLogger(__name__)
    log_func = getattr(logger, level.lower(), logger.info)
    log_func(json.dumps(log_data, ensure_ascii=False, default=str))

    return log_data
