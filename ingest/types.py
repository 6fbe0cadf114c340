from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Union

import pandas as pd

from ingest.summary import preview
from ingest.validation import ItemRow, item_to_record

Cell = Any
Matrix = List[List[Cell]]


class NoValidItemsError(ValueError):
    """Nenhuma aba da planilha produziu itens válidos."""


@dataclass
class RawSheet:
    """Aba já decodificada: nome + matriz de células brutas."""
    name: str
    rows: Matrix = field(default_factory=list)

    @classmethod
    def from_frame(cls, name: str, frame: pd.DataFrame) -> "RawSheet":
        """
        Converte um DataFrame em RawSheet.

        Aceita tanto `read_excel(header=None)` (colunas 0..n) quanto a leitura
        padrão, cujos rótulos de coluna voltam como primeira linha da matriz.
        Células NaN viram None.
        """
        body = frame.astype(object).where(frame.notna(), None).values.tolist()
        if isinstance(frame.columns, pd.RangeIndex):
            return cls(name=name, rows=body)
        labels = [
            '' if str(label).startswith('Unnamed:') else label
            for label in frame.columns
        ]
        return cls(name=name, rows=[labels] + body)


@dataclass
class HeaderAssignment:
    """Linha de cabeçalho localizada em uma aba."""
    header_row_index: int
    headers: List[str]


@dataclass
class ColumnRoles:
    """
    Papel semântico → índice de coluna.

    `product` e `price` sempre resolvidos; os demais podem ser None.
    """
    product: int
    price: int
    supplier: Optional[int] = None
    category: Optional[int] = None
    dose: Optional[int] = None
    unit: Optional[int] = None

    def identity_columns(self) -> Set[int]:
        """Colunas que identificam o item (produto, fornecedor, categoria)."""
        return {index for index in (self.product, self.supplier, self.category) if index is not None}

    def resolved_columns(self) -> Set[int]:
        return self.identity_columns() | {
            index for index in (self.price, self.dose, self.unit) if index is not None
        }

    def as_dict(self) -> Dict[str, Optional[int]]:
        return {
            'product': self.product,
            'supplier': self.supplier,
            'category': self.category,
            'price': self.price,
            'dose': self.dose,
            'unit': self.unit,
        }


@dataclass
class IngestionResult:
    """Resultado final da ingestão de uma planilha."""
    items: List[ItemRow] = field(default_factory=list)
    sheet_summary: Dict[str, int] = field(default_factory=dict)
    category_summary: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def decision(self) -> str:
        return 'error' if self.failed else 'save'

    def raise_for_error(self) -> None:
        """Levanta NoValidItemsError se a ingestão falhou."""
        if self.error is not None:
            raise NoValidItemsError(self.error)

    def preview(self, limit: int) -> Dict[str, Dict[str, int]]:
        """Resumos recolhidos: primeiras `limit` abas e categorias."""
        return {
            'sheets': preview(self.sheet_summary, limit),
            'categories': preview(self.category_summary, limit),
        }

    def to_records(self, quotation_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Itens no formato de registro de item de cotação."""
        return [item_to_record(item, quotation_id) for item in self.items]


SheetInput = Union[RawSheet, Sequence[Any]]


def coerce_sheets(workbook: Union[Mapping[str, Any], Iterable[SheetInput]]) -> List[RawSheet]:
    """
    Normaliza a entrada do pipeline em lista ordenada de RawSheet.

    Aceita:
    - lista de RawSheet
    - lista de pares (nome, matriz)
    - mapeamento {nome: matriz} (ordem de inserção = ordem das abas)
    - matrizes podem ser listas de linhas ou DataFrames

    Raises:
        TypeError: Se uma entrada não tem nenhum desses formatos
    """
    entries = workbook.items() if isinstance(workbook, Mapping) else workbook

    sheets: List[RawSheet] = []
    for entry in entries:
        if isinstance(entry, RawSheet):
            sheets.append(entry)
            continue
        if isinstance(entry, (tuple, list)) and len(entry) == 2:
            name, content = entry
            if isinstance(content, pd.DataFrame):
                sheets.append(RawSheet.from_frame(str(name), content))
            else:
                rows = content if content is not None else []
                sheets.append(RawSheet(name=str(name), rows=[list(row) for row in rows]))
            continue
        raise TypeError(f"Aba inválida: esperado RawSheet ou (nome, linhas), recebido {type(entry).__name__}")

    return sheets


def sheets_from_frames(frames: Mapping[str, pd.DataFrame]) -> List[RawSheet]:
    """
    Converte o resultado de `pd.read_excel(..., sheet_name=None, header=None)`.

    Args:
        frames: {nome da aba: DataFrame}

    Returns:
        Lista de RawSheet na ordem das abas
    """
    return [RawSheet.from_frame(str(name), frame) for name, frame in frames.items()]
