"""
Price Feed — HTTP-клиент источника спот-цен

Источник: GET <price_feed_url> → JSON-массив {currency, price, ...}.

Поведение при сбоях:
1. Таймаут (по умолчанию 5 секунд на весь запрос, включая чтение тела)
   → PriceFetchTimeout
2. Сетевая ошибка, статус != 2xx, невалидный JSON → PriceFetchError
3. load_remote_prices / load_remote_prices_async перехватывают оба случая,
   логируют и возвращают таблицу по умолчанию — таблица цен никогда не пустая

Повторов нет.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Optional

import requests

from src.core.config import EngineConfig, load_engine_config
from src.core.domain.price_table import PriceTable
from src.core.log import get_logger
from src.pricing.loader import load_prices

logger = get_logger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class PriceFetchError(Exception):
    """Источник цен недоступен или вернул невалидный ответ."""


class PriceFetchTimeout(PriceFetchError):
    """Источник цен не ответил за отведённое время."""


# =============================================================================
# HTTP
# =============================================================================


def fetch_price_feed(url: str, timeout: float) -> Any:
    """
    Запрос к источнику цен.

    Args:
        url: URL фида цен
        timeout: Таймаут запроса в секундах

    Returns:
        Декодированный JSON ответа (ожидается список)

    Raises:
        PriceFetchTimeout: Если запрос не уложился в timeout
        PriceFetchError: При сетевой ошибке, статусе != 2xx или невалидном JSON
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        return response.json()
    except requests.Timeout as e:
        raise PriceFetchTimeout(f"price feed timed out after {timeout}s: {url}") from e
    except (requests.RequestException, ValueError) as e:
        raise PriceFetchError(f"price feed request failed: {url}: {e}") from e


def fetch_price_feed_bounded(url: str, timeout: float) -> Any:
    """
    fetch_price_feed с общим дедлайном на весь запрос.

    Таймаут requests ограничивает только отдельные сокетные операции:
    сервер, отдающий тело по байту, держит вызов сколь угодно долго.
    Запрос выполняется в рабочем потоке, ожидание ограничено timeout;
    зависший поток не ждём.

    Raises:
        PriceFetchTimeout: Если ответ не получен целиком за timeout
        PriceFetchError: При сетевой ошибке, статусе != 2xx или невалидном JSON
    """
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="price-feed")
    try:
        future = executor.submit(fetch_price_feed, url, timeout)
        try:
            return future.result(timeout=timeout)
        except FutureTimeoutError as e:
            raise PriceFetchTimeout(f"price feed timed out after {timeout}s: {url}") from e
    finally:
        executor.shutdown(wait=False)


def _resolve_source(
    url: Optional[str], timeout: Optional[float], config: Optional[EngineConfig]
) -> tuple[str, float]:
    cfg = config or load_engine_config()
    return url or cfg.price_feed_url, timeout if timeout is not None else cfg.price_fetch_timeout_sec


def load_remote_prices(
    url: Optional[str] = None,
    timeout: Optional[float] = None,
    config: Optional[EngineConfig] = None,
) -> PriceTable:
    """
    Загрузка цен из источника с откатом на значения по умолчанию.

    Args:
        url: URL фида (default: из конфигурации)
        timeout: Таймаут в секундах (default: из конфигурации, 5 с)
        config: Конфигурация движка (default: load_engine_config())

    Returns:
        PriceTable: значения по умолчанию, перекрытые ценами фида,
        или только значения по умолчанию при сбое
    """
    url, timeout = _resolve_source(url, timeout, config)
    try:
        payload = fetch_price_feed_bounded(url, timeout)
    except PriceFetchTimeout:
        logger.error("price fetch timed out, using default prices", url=url, timeout_sec=timeout)
        return PriceTable.default()
    except PriceFetchError:
        logger.error("price fetch failed, using default prices", url=url)
        return PriceTable.default()

    return load_prices(payload)


async def load_remote_prices_async(
    url: Optional[str] = None,
    timeout: Optional[float] = None,
    config: Optional[EngineConfig] = None,
) -> PriceTable:
    """
    Асинхронная загрузка цен с жёсткой границей ожидания.

    Запрос выполняется в рабочем потоке; общее время ожидания ограничено
    timeout через asyncio.wait_for (таймаут requests ограничивает только
    отдельные сокетные операции).

    Returns:
        PriceTable (при таймауте или ошибке — таблица по умолчанию)
    """
    url, timeout = _resolve_source(url, timeout, config)
    try:
        payload = await asyncio.wait_for(
            asyncio.to_thread(fetch_price_feed, url, timeout), timeout=timeout
        )
    except (asyncio.TimeoutError, PriceFetchTimeout):
        logger.error("price fetch timed out, using default prices", url=url, timeout_sec=timeout)
        return PriceTable.default()
    except PriceFetchError:
        logger.error("price fetch failed, using default prices", url=url)
        return PriceTable.default()

    return load_prices(payload)
