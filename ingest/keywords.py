"""
Tabelas de palavras-chave usadas pelas heurísticas de ingestão.

Tudo o que depende do idioma das planilhas fica aqui: palavras de cabeçalho,
regras de papel das colunas, faixas de busca do preço, padrões de ruído e
rótulos de unidade. Os detectores recebem uma instância de `KeywordRules`;
para outro idioma basta construir outra tabela, sem mexer no fluxo.

Todas as palavras são comparadas com o texto já normalizado
(minúsculas, sem acentos, ver `normalization.normalize_text`).

Usado por:
- header_detector.py - pontuação da linha de cabeçalho
- column_detector.py - papéis das colunas e faixas de preço
- noise.py - filtro de linhas que não são produtos
- unit_inference.py - rótulo da unidade do preço
- extractor.py - colunas auxiliares e candidatas a preço
"""
import re
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class HeaderMatcher:
    """
    Regra de correspondência para um cabeçalho normalizado.

    Exclusões (`none_of`) têm precedência sobre qualquer inclusão.
    Casa se o cabeçalho é igual a um item de `exact`, ou se contém um item
    de `any_of` e (quando `also` não é vazio) também um item de `also`.
    """
    any_of: Tuple[str, ...] = ()
    also: Tuple[str, ...] = ()
    none_of: Tuple[str, ...] = ()
    exact: Tuple[str, ...] = ()

    def matches(self, header: str) -> bool:
        if any(word in header for word in self.none_of):
            return False
        if header in self.exact:
            return True
        if not any(word in header for word in self.any_of):
            return False
        return not self.also or any(word in header for word in self.also)

    def excludes(self, header: str) -> bool:
        return any(word in header for word in self.none_of)


@dataclass(frozen=True)
class UnitRule:
    """Padrão de cabeçalho → sufixo do rótulo de unidade (ex. '/ha')."""
    pattern: str
    suffix: str

    def matches(self, header: str) -> bool:
        return re.search(self.pattern, header) is not None


def matches_any(matchers: Tuple[HeaderMatcher, ...], header: str) -> bool:
    """True se alguma regra da tupla casa com o cabeçalho."""
    return any(matcher.matches(header) for matcher in matchers)


def first_match(headers, matchers: Tuple[HeaderMatcher, ...]) -> Optional[int]:
    """
    Índice do primeiro cabeçalho que casa com alguma das regras.

    Args:
        headers: Cabeçalhos normalizados
        matchers: Regras avaliadas para cada cabeçalho

    Returns:
        Índice da coluna ou None
    """
    for index, header in enumerate(headers):
        if matches_any(matchers, header):
            return index
    return None


# ============================================================================
# CABEÇALHO
# ============================================================================
HEADER_KEYWORDS = (
    'produto', 'product', 'descricao', 'description', 'item',
    'fornecedor', 'supplier', 'categoria', 'category',
    'valor', 'value', 'preco', 'price', 'custo', 'cost',
    'dose', 'unid', 'unit', '/ha',
)

# ============================================================================
# PAPÉIS DAS COLUNAS
# ============================================================================
PRICE_WORDS = ('preco', 'valor', 'custo', 'price')

PRODUCT_MATCHERS = (
    HeaderMatcher(
        any_of=('produto', 'product', 'insumo', 'nome', 'item', 'descricao',
                'description', 'cultivo', 'cultura', 'marca'),
        none_of=('dose', 'kg/ha', 'total', 'custo', 'preco', 'valor'),
    ),
)

SUPPLIER_MATCHERS = (
    HeaderMatcher(any_of=('fornecedor', 'empresa', 'supplier', 'fabricante', 'marca', 'brand')),
)

CATEGORY_MATCHERS = (
    HeaderMatcher(any_of=('categoria', 'category', 'tipo', 'grupo', 'classe', 'class',
                          'segmento', 'finalidade')),
)

# Faixas de busca do preço, em ordem de prioridade
PRICE_TIERS = (
    # Denominado explicitamente por hectare
    HeaderMatcher(
        any_of=('r$/ha', 'preco/ha', 'valor/ha', 'preco_ha', 'valor_ha', 'custo_ha', '/ha'),
        none_of=('total',),
    ),
    # Palavra de preço + hectare
    HeaderMatcher(any_of=('valor', 'preco', 'custo'), also=('ha',), none_of=('total',)),
    # Qualquer palavra de preço
    HeaderMatcher(any_of=PRICE_WORDS, none_of=('total',)),
)

DOSE_MATCHERS = (
    HeaderMatcher(any_of=('dose',)),
    HeaderMatcher(exact=('kg/ha', 'l/ha')),
    HeaderMatcher(any_of=('produto',), also=('kg', 'dose')),
)

UNIT_MATCHERS = (
    HeaderMatcher(any_of=('unid', 'unit')),
    HeaderMatcher(exact=('un', 'kg', 'l')),
)

# Cabeçalhos denominados em dinheiro: candidatos a preço na extração
MONEY_HEADER_MATCHER = HeaderMatcher(any_of=('valor', 'preco', 'custo', 'r$', 'price'))

# Colunas auxiliares que enriquecem o nome do produto
VOLUME_MATCHER = HeaderMatcher(any_of=('volume', 'embal', 'tamanho', 'conteudo', 'litro', 'ml', 'kg'))
PURPOSE_MATCHER = HeaderMatcher(any_of=('finalidade', 'aplicacao', 'aplica', 'uso', 'serve', 'indicacao'))

# ============================================================================
# VALORES MONETÁRIOS
# ============================================================================
CURRENCY_MARKERS = r"r\$|rs\$|usd|brl"

# ============================================================================
# RUÍDO
# ============================================================================
PUNCTUATION_ONLY = r"^[-_=/*\\.\s]+$"
NUMERIC_ONLY = r"^\d+[\d\s.,-]*$"
ADMIN_NOTE = (
    r"(observac|observation|anotac|obs\b|coment|comment|nota\b|notes?\b|resumo|summary"
    r"|legend|informac|information|detalhe|detail)"
)
CLOSING_NOTE = r"(total|subtotal|soma|resultado|conclusao|assinatura|aprovado|approved|signature)"
UNIT_PHRASE = r"\b(?:sacas?|sc|kg|l)\s*/?\s*ha\b|\bha\b|hectares?"

# ============================================================================
# RÓTULOS DE UNIDADE
# ============================================================================
UNIT_LABELS = (
    UnitRule(r"(?:/|_|\b)ha\b|hectare", "/ha"),
    UnitRule(r"/\s*(?:l|lt|litro)\b|\blitros?\b|\sl$", "/L"),
    UnitRule(r"/\s*kg\b|\skg$|\bquilos?\b", "/kg"),
    UnitRule(r"/\s*sc\b|\bsacas?\b", "/saca"),
    UnitRule(r"/\s*un(?:d|id|idade)?\b|unit", "/un"),
    UnitRule(r"total", " total"),
)


@dataclass(frozen=True)
class KeywordRules:
    """Tabela completa de regras; o padrão cobre planilhas em português e inglês."""
    header_keywords: Tuple[str, ...] = HEADER_KEYWORDS
    product: Tuple[HeaderMatcher, ...] = PRODUCT_MATCHERS
    supplier: Tuple[HeaderMatcher, ...] = SUPPLIER_MATCHERS
    category: Tuple[HeaderMatcher, ...] = CATEGORY_MATCHERS
    price_tiers: Tuple[HeaderMatcher, ...] = PRICE_TIERS
    dose: Tuple[HeaderMatcher, ...] = DOSE_MATCHERS
    unit: Tuple[HeaderMatcher, ...] = UNIT_MATCHERS
    money_header: HeaderMatcher = MONEY_HEADER_MATCHER
    volume: HeaderMatcher = VOLUME_MATCHER
    purpose: HeaderMatcher = PURPOSE_MATCHER
    currency_markers: str = CURRENCY_MARKERS
    punctuation_only: str = PUNCTUATION_ONLY
    numeric_only: str = NUMERIC_ONLY
    admin_note: str = ADMIN_NOTE
    closing_note: str = CLOSING_NOTE
    unit_phrase: str = UNIT_PHRASE
    unit_labels: Tuple[UnitRule, ...] = field(default=UNIT_LABELS)


DEFAULT_RULES = KeywordRules()
