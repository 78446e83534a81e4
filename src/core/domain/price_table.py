"""
PriceTable — Таблица спот-цен токенов

Отображение TokenSymbol → положительная спот-цена (quote currency: USD).

Инварианты:
- Цена нулевая, отрицательная, NaN или Inf недопустима (ошибка при создании)
- Отсутствующий токен не является ошибкой: при поиске подставляется
  нейтральная цена NEUTRAL_PRICE = 1.0
- Таблица неизменяема; обновление создаёт новый экземпляр
"""

from types import MappingProxyType
from typing import Final, Mapping

from pydantic import BaseModel, Field, field_validator

from src.core.domain.token import TokenSymbol, validate_token_symbol
from src.core.math.numerical_safeguards import is_valid_float


# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Нейтральная цена для неизвестного токена
NEUTRAL_PRICE: Final[float] = 1.0

# Таблица цен по умолчанию (USD)
DEFAULT_PRICES: Final[Mapping[TokenSymbol, float]] = MappingProxyType({
    "SWTH": 0.1,
    "ETH": 2000.0,
    "BTC": 40000.0,
    "USDC": 1.0,
    "USDT": 1.0,
    "SOL": 100.0,
    "ADA": 0.5,
    "DOT": 10.0,
    "LINK": 15.0,
    "UNI": 20.0,
})


# =============================================================================
# PRICE TABLE MODEL
# =============================================================================


class PriceTable(BaseModel):
    """
    Неизменяемая таблица спот-цен.

    Используется движком обмена как текущий снапшот цен. Конверсия всегда
    берёт цены из таблицы, актуальной на момент применения обмена.
    """

    prices: Mapping[TokenSymbol, float] = Field(
        default_factory=dict,
        validate_default=True,
        description="Спот-цены по символу токена (USD)",
    )

    model_config = {"frozen": True}

    @field_validator("prices")
    @classmethod
    def validate_prices(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        """Все цены конечные и строго положительные, символы непустые.

        Сохраняется как MappingProxyType (только чтение).
        """
        for symbol, price in v.items():
            validate_token_symbol(symbol)
            if not is_valid_float(price):
                raise ValueError(f"price for {symbol} must be finite, got {price}")
            if price <= 0:
                raise ValueError(f"price for {symbol} must be positive, got {price}")
        return MappingProxyType(dict(v))

    @classmethod
    def default(cls) -> "PriceTable":
        """Таблица цен по умолчанию (10 известных токенов)."""
        return cls(prices=dict(DEFAULT_PRICES))

    def has_price(self, symbol: TokenSymbol) -> bool:
        return symbol in self.prices

    def price_of(self, symbol: TokenSymbol) -> float:
        """
        Спот-цена токена.

        Args:
            symbol: Символ токена

        Returns:
            Цена из таблицы или NEUTRAL_PRICE, если токена нет
        """
        return self.prices.get(symbol, NEUTRAL_PRICE)

    def with_overlay(self, updates: Mapping[TokenSymbol, float]) -> "PriceTable":
        """
        Новая таблица: текущие цены, перекрытые updates.

        Args:
            updates: Новые цены (проходят ту же валидацию)

        Returns:
            Новый экземпляр PriceTable
        """
        return PriceTable(prices={**self.prices, **dict(updates)})

    def symbols(self) -> list[TokenSymbol]:
        return list(self.prices)

    def __len__(self) -> int:
        return len(self.prices)
