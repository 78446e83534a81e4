"""
EngineConfig — Конфигурация движка обмена

Значения по умолчанию соответствуют поведению формы обмена:
- история из 5 последних записей
- имитация обработки обмена 2 секунды
- загрузка цен ограничена 5 секундами

Переопределение через окружение (файл .env подхватывается python-dotenv):
    SWAP_PRICE_FEED_URL
    SWAP_PRICE_FETCH_TIMEOUT_SEC
    SWAP_LATENCY_SEC
    SWAP_HISTORY_CAPACITY
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Final

from dotenv import load_dotenv

from src.core.math.numerical_safeguards import (
    AMOUNT_DISPLAY_DECIMALS,
    BALANCE_DISPLAY_DECIMALS,
    validate_non_negative,
    validate_positive,
)


# =============================================================================
# CONSTANTS
# =============================================================================

DEFAULT_PRICE_FEED_URL: Final[str] = "https://interview.switcheo.com/prices.json"
DEFAULT_PRICE_FETCH_TIMEOUT_SEC: Final[float] = 5.0
DEFAULT_SWAP_LATENCY_SEC: Final[float] = 2.0
DEFAULT_HISTORY_CAPACITY: Final[int] = 5


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация ConversionEngine.

    Параметры сессии обмена, неизменяемы после создания.
    """

    history_capacity: int = DEFAULT_HISTORY_CAPACITY
    swap_latency_sec: float = DEFAULT_SWAP_LATENCY_SEC
    price_fetch_timeout_sec: float = DEFAULT_PRICE_FETCH_TIMEOUT_SEC
    price_feed_url: str = DEFAULT_PRICE_FEED_URL
    amount_display_decimals: int = AMOUNT_DISPLAY_DECIMALS
    balance_display_decimals: int = BALANCE_DISPLAY_DECIMALS

    def __post_init__(self) -> None:
        if self.history_capacity < 1:
            raise ValueError(f"history_capacity must be >= 1, got {self.history_capacity}")
        validate_non_negative(self.swap_latency_sec, "swap_latency_sec")
        validate_positive(self.price_fetch_timeout_sec, "price_fetch_timeout_sec")
        if not self.price_feed_url:
            raise ValueError("price_feed_url must be non-empty")
        if self.amount_display_decimals < 0 or self.balance_display_decimals < 0:
            raise ValueError("display decimals must be non-negative")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


@lru_cache
def load_engine_config() -> EngineConfig:
    """
    Конфигурация из окружения (с подгрузкой .env из корня проекта).

    Результат кэшируется на процесс; для перечитывания окружения —
    load_engine_config.cache_clear().

    Raises:
        ValueError: Если переменная окружения не разбирается или вне диапазона
    """
    load_dotenv(Path(__file__).parent.parent.parent / ".env")
    return EngineConfig(
        history_capacity=_env_int("SWAP_HISTORY_CAPACITY", DEFAULT_HISTORY_CAPACITY),
        swap_latency_sec=_env_float("SWAP_LATENCY_SEC", DEFAULT_SWAP_LATENCY_SEC),
        price_fetch_timeout_sec=_env_float(
            "SWAP_PRICE_FETCH_TIMEOUT_SEC", DEFAULT_PRICE_FETCH_TIMEOUT_SEC
        ),
        price_feed_url=os.getenv("SWAP_PRICE_FEED_URL", DEFAULT_PRICE_FEED_URL),
    )
