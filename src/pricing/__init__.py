"""Pricing — таблица спот-цен: значения по умолчанию, фид цен, слияние.

- load_prices: чистое слияние данных фида с таблицей по умолчанию
- load_remote_prices / load_remote_prices_async: HTTP-загрузка с таймаутом
  и откатом на значения по умолчанию
"""

from .feed import (
    PriceFetchError,
    PriceFetchTimeout,
    fetch_price_feed,
    fetch_price_feed_bounded,
    load_remote_prices,
    load_remote_prices_async,
)
from .loader import load_prices, parse_price_entry

__all__ = [
    "PriceFetchError",
    "PriceFetchTimeout",
    "fetch_price_feed",
    "fetch_price_feed_bounded",
    "load_prices",
    "load_remote_prices",
    "load_remote_prices_async",
    "parse_price_entry",
]
