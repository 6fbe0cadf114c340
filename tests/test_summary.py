"""
Testes unitários dos resumos por aba e por categoria.
"""
from ingest.summary import build_category_summary, build_sheet_summary, distinct_counts, preview
from ingest.validation import ItemRow


def _item(produto, categoria, fornecedor=""):
    return ItemRow(produto=produto, categoria=categoria, fornecedor=fornecedor, valor=1)


class TestSheetSummary:
    """Testes do resumo por aba."""

    def test_excludes_empty_and_sorts_descending(self):
        """Testa abas vazias excluídas e ordem decrescente estável."""
        summary = build_sheet_summary({"A": 1, "B": 0, "C": 3, "D": 1})
        assert list(summary.items()) == [("C", 3), ("A", 1), ("D", 1)]

    def test_all_empty(self):
        """Testa resumo vazio."""
        assert build_sheet_summary({"A": 0}) == {}


class TestCategorySummary:
    """Testes do resumo por categoria."""

    def test_counts_across_items(self):
        """Testa contagem por categoria."""
        items = [_item("Soja", "Sementes"), _item("Glifosato", "Herbicida"), _item("Milho", "Sementes")]
        assert list(build_category_summary(items).items()) == [("Sementes", 2), ("Herbicida", 1)]

    def test_preview(self):
        """Testa visão recolhida."""
        summary = {"C": 3, "A": 2, "B": 1}
        assert preview(summary, 2) == {"C": 3, "A": 2}
        assert preview(summary, 10) == summary


class TestDistinctCounts:
    """Testes da contagem de distintos."""

    def test_counts(self):
        """Testa produtos, fornecedores e categorias distintos."""
        items = [
            _item("Soja", "Sementes", "Agro Sul"),
            _item("Soja", "Sementes", "Nortox"),
            _item("Glifosato", "Herbicida"),
        ]
        assert distinct_counts(items) == {'produtos': 2, 'fornecedores': 2, 'categorias': 2}
