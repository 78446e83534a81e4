"""
Token — Символы токенов и реестр известных токенов

TokenSymbol — непрозрачный строковый идентификатор (например, "ETH"):
- не пустой
- регистрозависимый, используется как стабильный ключ

Реестр содержит метаданные 10 токенов сессии (символ, название, иконка)
и стартовые балансы пользователя.
"""

from types import MappingProxyType
from typing import Final, Iterable, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

TokenSymbol = str


# =============================================================================
# ВАЛИДАЦИЯ СИМВОЛА
# =============================================================================


def validate_token_symbol(symbol: str) -> str:
    """
    Проверка символа токена.

    Символ не нормализуется: "eth" и "ETH" — разные ключи.

    Args:
        symbol: Символ токена

    Returns:
        Тот же символ без изменений

    Raises:
        ValueError: Если символ не строка, пустой или состоит из пробелов
    """
    if not isinstance(symbol, str):
        raise ValueError(f"Token symbol must be a string, got {type(symbol).__name__}")
    if not symbol.strip():
        raise ValueError("Token symbol must be non-empty")
    return symbol


# =============================================================================
# TOKEN MODEL
# =============================================================================


class Token(BaseModel):
    """Метаданные токена для выбора в форме обмена."""

    symbol: TokenSymbol = Field(..., min_length=1, description="Символ токена (например, 'SWTH')")
    name: str = Field(..., min_length=1, description="Человекочитаемое название")
    icon_url: str = Field(..., description="URL иконки токена")

    model_config = {"frozen": True}

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        return validate_token_symbol(v)

    def matches(self, term: str) -> bool:
        """
        Поиск без учёта регистра по символу или названию.

        Пустая строка совпадает с любым токеном.
        """
        needle = term.strip().lower()
        return needle in self.symbol.lower() or needle in self.name.lower()


# =============================================================================
# РЕЕСТР ПО УМОЛЧАНИЮ
# =============================================================================

TOKEN_ICON_BASE_URL: Final[str] = "https://raw.githubusercontent.com/Switcheo/token-icons/main/tokens"


def _token(symbol: str, name: str) -> Token:
    return Token(symbol=symbol, name=name, icon_url=f"{TOKEN_ICON_BASE_URL}/{symbol}.svg")


DEFAULT_TOKENS: Final[tuple[Token, ...]] = (
    _token("SWTH", "Switcheo Token"),
    _token("ETH", "Ethereum"),
    _token("BTC", "Bitcoin"),
    _token("USDC", "USD Coin"),
    _token("USDT", "Tether"),
    _token("SOL", "Solana"),
    _token("ADA", "Cardano"),
    _token("DOT", "Polkadot"),
    _token("LINK", "Chainlink"),
    _token("UNI", "Uniswap"),
)

# Стартовые балансы сессии
DEFAULT_BALANCES: Final[Mapping[TokenSymbol, float]] = MappingProxyType({
    "SWTH": 1000.0,
    "ETH": 5.0,
    "BTC": 0.1,
    "USDC": 5000.0,
    "USDT": 3000.0,
    "SOL": 50.0,
    "ADA": 2000.0,
    "DOT": 100.0,
    "LINK": 200.0,
    "UNI": 100.0,
})

# Пара по умолчанию в форме обмена
DEFAULT_FROM_TOKEN: Final[TokenSymbol] = "SWTH"
DEFAULT_TO_TOKEN: Final[TokenSymbol] = "ETH"


def find_token(symbol: TokenSymbol, tokens: Iterable[Token] = DEFAULT_TOKENS) -> Optional[Token]:
    """Поиск токена по точному символу; None если не найден."""
    for token in tokens:
        if token.symbol == symbol:
            return token
    return None


def search_tokens(term: str, tokens: Iterable[Token] = DEFAULT_TOKENS) -> list[Token]:
    """
    Фильтрация реестра по строке поиска.

    Порядок токенов сохраняется.

    Args:
        term: Строка поиска (регистр не важен)
        tokens: Реестр токенов (default: DEFAULT_TOKENS)

    Returns:
        Список токенов, у которых символ или название содержит term
    """
    return [token for token in tokens if token.matches(term)]
