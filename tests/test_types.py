"""
Testes unitários dos tipos de entrada e resultado.
"""
import numpy as np
import pandas as pd
import pytest

from ingest.types import (
    ColumnRoles,
    IngestionResult,
    NoValidItemsError,
    RawSheet,
    coerce_sheets,
    sheets_from_frames,
)
from ingest.validation import ItemRow


class TestRawSheetFromFrame:
    """Testes da conversão de DataFrame."""

    def test_frame_without_header(self):
        """Testa leitura com header=None."""
        frame = pd.DataFrame([["Produto", "Valor"], ["Soja", 350.0]])
        sheet = RawSheet.from_frame("Sementes", frame)
        assert sheet.name == "Sementes"
        assert sheet.rows == [["Produto", "Valor"], ["Soja", 350.0]]

    def test_nan_becomes_none(self):
        """Testa NaN convertido em None."""
        frame = pd.DataFrame([["Produto", "Valor"], ["Soja", None]])
        assert RawSheet.from_frame("A", frame).rows[1] == ["Soja", None]

    def test_column_labels_become_first_row(self):
        """Testa rótulos de coluna como primeira linha."""
        frame = pd.DataFrame({"Produto": ["Soja"], "Unnamed: 1": ["x"]})
        assert RawSheet.from_frame("A", frame).rows == [["Produto", ""], ["Soja", "x"]]

    def test_sheets_from_frames(self):
        """Testa ordem das abas preservada."""
        frames = {
            "Sementes": pd.DataFrame([["Produto"]]),
            "Defensivos": pd.DataFrame([["Produto"]]),
        }
        assert [sheet.name for sheet in sheets_from_frames(frames)] == ["Sementes", "Defensivos"]


class TestCoerceSheets:
    """Testes dos formatos de entrada."""

    def test_mapping(self):
        """Testa mapeamento {nome: linhas}."""
        sheets = coerce_sheets({"A": [["x"]], "B": []})
        assert [(sheet.name, sheet.rows) for sheet in sheets] == [("A", [["x"]]), ("B", [])]

    def test_pairs_and_raw_sheets(self):
        """Testa pares e RawSheet misturados."""
        sheets = coerce_sheets([("A", [("x", 1)]), RawSheet("B", [["y"]])])
        assert sheets[0].rows == [["x", 1]]
        assert sheets[1].name == "B"

    def test_dataframe_content(self):
        """Testa DataFrame como conteúdo da aba."""
        sheets = coerce_sheets([("A", pd.DataFrame([["Produto"]]))])
        assert sheets[0].rows == [["Produto"]]

    def test_numpy_content(self):
        """Testa matriz numpy como conteúdo da aba."""
        matrix = np.array([["Produto", "Valor"], ["Soja", "350"]], dtype=object)
        sheets = coerce_sheets({"A": matrix})
        assert sheets[0].rows == [["Produto", "Valor"], ["Soja", "350"]]

    def test_none_content(self):
        """Testa conteúdo None."""
        assert coerce_sheets([("A", None)])[0].rows == []

    @pytest.mark.parametrize("entry", [123, ("A",), "planilha"])
    def test_invalid_entry(self, entry):
        """Testa entrada inválida."""
        with pytest.raises(TypeError):
            coerce_sheets([entry])


class TestColumnRoles:
    """Testes dos papéis das colunas."""

    def test_identity_and_resolved(self):
        """Testa colunas de identidade e resolvidas."""
        roles = ColumnRoles(product=0, price=3, supplier=1, unit=4)
        assert roles.identity_columns() == {0, 1}
        assert roles.resolved_columns() == {0, 1, 3, 4}


class TestIngestionResult:
    """Testes do resultado da ingestão."""

    def test_failed_result(self):
        """Testa resultado com erro."""
        result = IngestionResult(error="nenhum item")
        assert result.failed
        assert result.decision == 'error'
        with pytest.raises(NoValidItemsError, match="nenhum item"):
            result.raise_for_error()

    def test_successful_result(self):
        """Testa resultado com itens."""
        result = IngestionResult(
            items=[ItemRow(produto="Soja", valor=10)],
            sheet_summary={"A": 3, "B": 2, "C": 1},
            category_summary={"Soja": 1},
        )
        assert not result.failed
        assert result.decision == 'save'
        result.raise_for_error()
        assert result.preview(2) == {'sheets': {"A": 3, "B": 2}, 'categories': {"Soja": 1}}
        assert result.to_records("q-9")[0]['cotacao_id'] == "q-9"

    def test_no_valid_items_is_value_error(self):
        """Testa hierarquia da exceção."""
        assert issubclass(NoValidItemsError, ValueError)
