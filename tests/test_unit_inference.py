"""
Testes unitários da unidade do preço.
"""
import pytest

from core.config import IngestConfig
from ingest.unit_inference import infer_price_unit


class TestUnitFromHeader:
    """Testes das regras de cabeçalho."""

    @pytest.mark.parametrize("header,expected", [
        ("Valor/ha", "R$/ha"),
        ("Preço por hectare", "R$/ha"),
        ("custo_ha", "R$/ha"),
        ("Preço R$/L", "R$/L"),
        ("Preço por litro", "R$/L"),
        ("Preço/kg", "R$/kg"),
        ("Preço saca", "R$/saca"),
        ("Valor unitário", "R$/un"),
        ("Valor/Unid", "R$/un"),
        ("Preço/Unidade", "R$/un"),
        ("Preço/und", "R$/un"),
        ("Preço Total", "R$ total"),
    ])
    def test_header_rules(self, config, header, expected):
        """Testa rótulo derivado do cabeçalho."""
        assert infer_price_unit(header, [], None, config) == expected

    def test_per_unit_header_wins_over_default(self, config):
        """Testa 'Valor/Unid' sem cair na unidade padrão."""
        assert infer_price_unit("Valor/Unid", ["Soja", "10"], None, config) == "R$/un"

    def test_header_rule_wins_over_unit_column(self, config):
        """Testa cabeçalho com precedência sobre a coluna de unidade."""
        assert infer_price_unit("Preço/kg", ["Soja", "10", "sc"], 2, config) == "R$/kg"


class TestUnitFallbacks:
    """Testes da coluna de unidade e da unidade padrão."""

    def test_unit_column_text(self, config):
        """Testa texto da coluna de unidade."""
        assert infer_price_unit("Preço", ["Ureia", "2.900", "R$/t"], 2, config) == "R$/t"

    def test_empty_unit_cell_uses_default(self, config):
        """Testa célula de unidade vazia."""
        assert infer_price_unit("Preço", ["Ureia", "2.900", ""], 2, config) == "R$/ha"

    def test_default_unit(self, config):
        """Testa unidade padrão."""
        assert infer_price_unit("Preço", ["Ureia", "2.900"], None, config) == "R$/ha"

    def test_custom_currency(self):
        """Testa moeda configurável."""
        custom = IngestConfig(currency_label="US$")
        assert infer_price_unit("Price", [], None, custom) == "US$/ha"
        assert infer_price_unit("Price/kg", [], None, custom) == "US$/kg"
