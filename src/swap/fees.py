"""Сетевые комиссии для отображения в форме обмена (USD, по исходному токену)."""

from types import MappingProxyType
from typing import Final, Mapping

from src.core.domain.token import TokenSymbol

DEFAULT_NETWORK_FEE_USD: Final[float] = 1.50

NETWORK_FEES_USD: Final[Mapping[TokenSymbol, float]] = MappingProxyType({
    "ETH": 2.50,
    "BTC": 5.00,
    "SWTH": 0.50,
    "USDC": 1.00,
    "USDT": 1.00,
})


def network_fee_usd(from_token: TokenSymbol) -> float:
    """Комиссия сети для исходного токена; для прочих токенов — 1.50 USD."""
    return NETWORK_FEES_USD.get(from_token, DEFAULT_NETWORK_FEE_USD)


def format_network_fee(from_token: TokenSymbol) -> str:
    """'$2.50' для ETH."""
    return f"${network_fee_usd(from_token):.2f}"
