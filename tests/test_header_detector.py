"""
Testes unitários da localização do cabeçalho.
"""
from core.config import IngestConfig
from ingest.header_detector import data_rows_after, find_header_row, locate_header, score_header_row


def _quotation_matrix():
    return [
        ["Cotação de Insumos - Safra 24/25"],
        ["Fazenda Santa Rita"],
        [],
        ["Produto", "Fornecedor", "Categoria", "Valor/ha"],
        ["Soja M 6410", "Agro Sul", "Sementes", "350,00"],
    ]


class TestScoreHeaderRow:
    """Testes de pontuação de linha."""

    def test_header_row_score(self, config):
        """Testa pontuação de um cabeçalho típico."""
        row = ["Produto", "Fornecedor", "Categoria", "Valor/ha"]
        # 4 palavras-chave × 5 + 4 textos + 4 células
        assert score_header_row(row, config) == 28

    def test_money_cells_are_not_text(self, config):
        """Testa que valores monetários não contam como texto."""
        assert score_header_row(["350,00", "R$ 12"], config) == 2

    def test_empty_row_has_no_score(self, config):
        """Testa linha vazia sem pontuação."""
        assert score_header_row([], config) is None
        assert score_header_row(["", None, "  "], config) is None


class TestFindHeaderRow:
    """Testes de escolha da linha de cabeçalho."""

    def test_skips_title_rows(self, config):
        """Testa título e linha vazia antes do cabeçalho."""
        assert find_header_row(_quotation_matrix(), config) == 3

    def test_tie_keeps_first_row(self, config):
        """Testa empate mantendo a linha mais acima."""
        matrix = [["Produto", "Valor"], ["Produto", "Valor"]]
        assert find_header_row(matrix, config) == 0

    def test_scan_limit(self):
        """Testa limite de linhas varridas."""
        matrix = [["x"]] * 30 + [["Produto", "Fornecedor", "Valor/ha"]]
        assert find_header_row(matrix, IngestConfig(header_scan_rows=25)) == 0
        assert find_header_row(matrix, IngestConfig(header_scan_rows=40)) == 30

    def test_no_scored_rows_returns_zero(self, config):
        """Testa linha 0 quando nenhuma linha pontua."""
        assert find_header_row([[], [None]], config) == 0


class TestLocateHeader:
    """Testes do cabeçalho localizado."""

    def test_returns_trimmed_labels(self, config):
        """Testa rótulos aparados."""
        matrix = [["  Produto ", "Valor/ha  "], ["Soja", "350"]]
        header = locate_header(matrix, config)
        assert header.header_row_index == 0
        assert header.headers == ["Produto", "Valor/ha"]

    def test_quotation_layout(self, config):
        """Testa planilha com título antes do cabeçalho."""
        header = locate_header(_quotation_matrix(), config)
        assert header.header_row_index == 3
        assert header.headers == ["Produto", "Fornecedor", "Categoria", "Valor/ha"]

    def test_empty_sheet(self, config):
        """Testa aba sem linhas."""
        assert locate_header([], config) is None

    def test_blank_scan_window_uses_row_zero(self, config):
        """Testa linha 0 sem rótulos quando a janela de varredura está vazia."""
        matrix = [[] for _ in range(26)] + [["Glifosato 480", "Agro Sul", "152,40"]]
        header = locate_header(matrix, config)
        assert header.header_row_index == 0
        assert header.headers == []
        assert data_rows_after(matrix, header.header_row_index) == [["Glifosato 480", "Agro Sul", "152,40"]]


class TestDataRowsAfter:
    """Testes das linhas de dados."""

    def test_blank_rows_are_skipped(self):
        """Testa linhas vazias descartadas."""
        matrix = [["h"], ["a"], [], ["", None], ["b"]]
        assert data_rows_after(matrix, 0) == [["a"], ["b"]]

    def test_header_at_last_row(self):
        """Testa cabeçalho na última linha."""
        assert data_rows_after([["x"], ["h"]], 1) == []
