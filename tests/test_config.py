"""
Testes unitários da configuração.
"""
import pytest
from pydantic import ValidationError

from core.config import IngestConfig, get_config, reset_config


class TestIngestConfig:
    """Testes de valores padrão e ambiente."""

    def test_defaults(self, config):
        """Testa valores padrão."""
        assert config.header_scan_rows == 25
        assert config.header_keyword_weight == 5
        assert config.header_density_cap == 12
        assert config.role_sample_rows == 5
        assert config.candidate_sample_rows == 12
        assert config.min_numeric_hits == 2
        assert config.price_fallback_column == 3
        assert config.fuzzy_header_threshold is None
        assert config.default_category == "Insumo"
        assert config.default_unit_label() == "R$/ha"

    def test_environment_override(self, monkeypatch):
        """Testa variáveis de ambiente."""
        monkeypatch.setenv("HEADER_SCAN_ROWS", "10")
        monkeypatch.setenv("FUZZY_HEADER_THRESHOLD", "0.9")
        config = IngestConfig()
        assert config.header_scan_rows == 10
        assert config.fuzzy_header_threshold == 0.9

    def test_invalid_threshold(self):
        """Testa limiar fora de 0-1."""
        with pytest.raises(ValidationError):
            IngestConfig(fuzzy_header_threshold=1.5)


class TestGetConfig:
    """Testes da instância global."""

    def test_singleton(self):
        """Testa mesma instância."""
        assert get_config() is get_config()

    def test_reset_rereads_environment(self, monkeypatch):
        """Testa releitura do ambiente após reset."""
        first = get_config()
        monkeypatch.setenv("DEFAULT_CATEGORY", "Outros")
        reset_config()
        second = get_config()
        assert second is not first
        assert second.default_category == "Outros"
