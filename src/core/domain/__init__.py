"""
Domain models and value objects.

Contains fundamental domain entities: Token, PriceTable, BalanceSheet,
SwapRequest, SwapRecord.
"""

from src.core.domain.balance_sheet import BalanceSheet
from src.core.domain.price_table import DEFAULT_PRICES, NEUTRAL_PRICE, PriceTable
from src.core.domain.swap import SwapRecord, SwapRequest, SwapStatus
from src.core.domain.token import (
    DEFAULT_BALANCES,
    DEFAULT_FROM_TOKEN,
    DEFAULT_TO_TOKEN,
    DEFAULT_TOKENS,
    Token,
    TokenSymbol,
    find_token,
    search_tokens,
    validate_token_symbol,
)

__all__ = [
    # Token registry
    "DEFAULT_BALANCES",
    "DEFAULT_FROM_TOKEN",
    "DEFAULT_TO_TOKEN",
    "DEFAULT_TOKENS",
    "Token",
    "TokenSymbol",
    "find_token",
    "search_tokens",
    "validate_token_symbol",
    # Prices
    "DEFAULT_PRICES",
    "NEUTRAL_PRICE",
    "PriceTable",
    # Balances
    "BalanceSheet",
    # Swap models
    "SwapRecord",
    "SwapRequest",
    "SwapStatus",
]
