"""Resumos da importação por aba e por categoria (somente exibição)."""
from typing import Dict, Iterable, List, Mapping

from ingest.validation import ItemRow


def _sorted_by_count(counts: Mapping[str, int]) -> Dict[str, int]:
    # sorted é estável: empates mantêm a ordem de inserção
    return dict(sorted(counts.items(), key=lambda entry: entry[1], reverse=True))


def build_sheet_summary(per_sheet: Mapping[str, int]) -> Dict[str, int]:
    """Aba → itens, sem abas vazias, em ordem decrescente de itens."""
    return _sorted_by_count({name: count for name, count in per_sheet.items() if count > 0})


def build_category_summary(items: Iterable[ItemRow], default: str = "Insumo") -> Dict[str, int]:
    """Categoria → itens em todas as abas, em ordem decrescente."""
    counts: Dict[str, int] = {}
    for item in items:
        category = item.categoria or default
        counts[category] = counts.get(category, 0) + 1
    return _sorted_by_count(counts)


def preview(summary: Mapping[str, int], limit: int) -> Dict[str, int]:
    """Primeiras `limit` entradas do resumo (visão recolhida)."""
    return dict(list(summary.items())[:limit])


def distinct_counts(items: List[ItemRow]) -> Dict[str, int]:
    """Quantidade de produtos, fornecedores e categorias distintos."""
    return {
        'produtos': len({item.produto for item in items}),
        'fornecedores': len({item.fornecedor for item in items if item.fornecedor}),
        'categorias': len({item.categoria for item in items}),
    }
