"""
Configuração do motor de ingestão usando pydantic-settings.

Todas as constantes das heurísticas (varredura do cabeçalho, amostragem de
colunas, limites do filtro de ruído) são campos configuráveis via variáveis
de ambiente ou `.env`.
"""
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Carrega .env
load_dotenv()

logger = logging.getLogger(__name__)


class IngestConfig(BaseSettings):
    """Configuração completa do motor de ingestão."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Localização do cabeçalho
    header_scan_rows: int = Field(default=25, ge=1, description="Linhas varridas procurando o cabeçalho")
    header_keyword_weight: int = Field(default=5, ge=0, description="Peso de cada célula com palavra-chave de cabeçalho")
    header_density_cap: int = Field(default=12, ge=0, description="Limite do bônus por células preenchidas")

    # Detecção de colunas
    role_sample_rows: int = Field(default=5, ge=1, description="Linhas de dados amostradas na detecção de papéis")
    candidate_sample_rows: int = Field(default=12, ge=1, description="Linhas amostradas ao ranquear colunas de preço")
    min_numeric_hits: int = Field(default=2, ge=1, description="Valores monetários > 0 exigidos para coluna numérica")
    price_fallback_column: int = Field(default=3, ge=0, description="Coluna de preço quando nenhuma regra resolve")
    fuzzy_header_threshold: Optional[float] = Field(
        default=None,
        ge=0.0,
        le=1.0,
        description="Similaridade mínima (rapidfuzz) para cabeçalhos com erro de digitação; None desativa"
    )

    # Filtro de ruído
    max_product_length: int = Field(default=120, ge=1, description="Comprimento máximo de um nome de produto")
    max_unit_phrase_words: int = Field(default=3, ge=1, description="Palavras máximas de um rótulo de unidade solto")

    # Itens
    default_category: str = Field(default="Insumo", description="Categoria quando a planilha não informa")
    currency_label: str = Field(default="R$", description="Moeda usada nos rótulos de unidade")
    default_price_unit: str = Field(default="/ha", description="Unidade padrão do preço")

    # Resumo
    summary_preview_limit: int = Field(default=4, ge=1, description="Entradas exibidas no resumo recolhido")

    # Logging
    log_level: str = Field(default="INFO", description="Nível de log")
    service_name: str = Field(default="cotacao-ingest", description="Nome do serviço nos logs")

    def default_unit_label(self) -> str:
        """Rótulo de unidade padrão (ex. 'R$/ha')."""
        return f"{self.currency_label}{self.default_price_unit}"


_config: Optional[IngestConfig] = None


def get_config() -> IngestConfig:
    """Obtém instância de configuração (criada na primeira chamada)."""
    global _config
    if _config is None:
        _config = IngestConfig()
        logger.debug(f"[CONFIG] Configuração carregada: {_config.model_dump()}")
    return _config


def reset_config() -> None:
    """Descarta a instância atual; a próxima chamada a get_config() relê o ambiente."""
    global _config
    _config = None
