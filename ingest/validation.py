"""
Validação (modelos Pydantic) dos itens de cotação.

Define ItemRow, a validação em lote e o mapeamento para o registro
persistido pelo serviço de cotações.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from ingest.money import parse_money

logger = logging.getLogger(__name__)


class ItemRow(BaseModel):
    """
    Modelo Pydantic v2 para um item de cotação extraído da planilha.

    Invariante: valor > 0 e finito; nenhum item sai com preço zero,
    negativo ou NaN.
    """
    produto: str = Field(..., min_length=1, description="Produto (nome + embalagem + finalidade)")
    fornecedor: str = Field(default="", description="Fornecedor (pode ser vazio)")
    categoria: str = Field(default="Insumo", description="Categoria em Title Case")
    valor: Decimal = Field(..., gt=0, description="Preço (> 0)")
    dose: str = Field(default="", description="Dose como escrita na planilha")
    unidade: str = Field(default="R$/ha", description="Unidade do preço (R$/ha, R$/kg, ...)")

    @field_validator('produto')
    @classmethod
    def validate_produto(cls, v: str) -> str:
        """Valida e normaliza o nome do produto."""
        v = v.strip()
        if not v:
            raise ValueError("produto deve ser não vazio")
        return v

    @field_validator('fornecedor', 'dose', 'unidade')
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    @field_validator('categoria')
    @classmethod
    def validate_categoria(cls, v: str) -> str:
        return v.strip() or "Insumo"

    @field_validator('valor')
    @classmethod
    def validate_valor(cls, v: Decimal) -> Decimal:
        if not v.is_finite():
            raise ValueError("valor deve ser finito")
        return v

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "produto": "Glifosato 480 [20 L] - Dessecação",
                "fornecedor": "Agro Sul",
                "categoria": "Herbicida",
                "valor": "152.40",
                "dose": "2,5",
                "unidade": "R$/ha"
            }
        }
    }


def validate_batch(items_data: List[Dict[str, Any]]) -> Tuple[List[ItemRow], List[Dict[str, Any]], Dict[str, Any]]:
    """
    Valida um lote de itens com Pydantic.

    Args:
        items_data: Lista de dicionários com os campos do item

    Returns:
        Tuple (valid_items, rejected_items, stats):
        - valid_items: Lista de ItemRow válidos, na ordem de entrada
        - rejected_items: Lista de dicionários com 'index', 'data' e 'error'
        - stats: Dict com rows_total, rows_valid, rows_rejected
    """
    valid_items: List[ItemRow] = []
    rejected_items: List[Dict[str, Any]] = []

    for idx, item_data in enumerate(items_data):
        try:
            valid_items.append(ItemRow(**item_data))
        except ValidationError as e:
            logger.debug(f"[VALIDATION] Item {idx+1} rejeitado: {e.error_count()} erro(s) - {item_data}")
            rejected_items.append({
                'index': idx,
                'data': item_data,
                'error': str(e),
            })

    stats = {
        'rows_total': len(items_data),
        'rows_valid': len(valid_items),
        'rows_rejected': len(rejected_items),
    }

    if rejected_items:
        logger.info(
            f"[VALIDATION] Lote: {stats['rows_valid']}/{stats['rows_total']} válidos, "
            f"{stats['rows_rejected']} rejeitados"
        )

    return valid_items, rejected_items, stats


def item_to_record(item: ItemRow, quotation_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Converte ItemRow no registro de item de cotação.

    A dose é convertida em número quando possível ("2,5" → 2.5); dose
    vazia, zero ou não numérica vira None.

    Args:
        item: Item validado
        quotation_id: ID da cotação (incluído se informado)

    Returns:
        Dict com os campos do registro
    """
    dose_ha = parse_money(item.dose) if item.dose else None
    record: Dict[str, Any] = {
        'produto_nome': item.produto,
        'fornecedor': item.fornecedor,
        'categoria': item.categoria,
        'valor_ha': item.valor,
        'dose_ha': dose_ha or None,
        'unidade': item.unidade or None,
        'quantidade': 1,
        'preco_unitario': item.valor,
    }
    if quotation_id is not None:
        record['cotacao_id'] = quotation_id
    return record
