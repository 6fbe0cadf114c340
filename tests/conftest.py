"""
Configuração pytest e fixtures comuns.
"""
import pytest

from core.config import IngestConfig, reset_config


@pytest.fixture
def config():
    """Configuração com os valores padrão (sem depender de get_config)."""
    return IngestConfig()


@pytest.fixture(autouse=True)
def _fresh_config():
    """Cada teste começa sem instância global de configuração."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sementes_rows():
    """Aba de sementes com título, linha vazia, 4 produtos e 1 observação."""
    return [
        ["Cotação Sementes Safra 24/25"],
        [],
        ["Produto", "Fornecedor", "Categoria", "Valor/ha"],
        ["Soja M 6410 IPRO", "Agro Sul", "Soja", "350,00"],
        ["Soja BMX Zeus", "Sementes Boa Safra", "Soja", "R$ 410,50"],
        ["Milho AG 8480", "Agroceres", "milho", "1.250,00"],
        ["Trigo TBIO Toruk", "Biotrigo", "TRIGO", 295.5],
        ["Observações: frete incluso", "", "", ""],
    ]
