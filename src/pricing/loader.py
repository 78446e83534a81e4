"""
Price Loader — Сборка таблицы цен из значений по умолчанию и данных фида

Алгоритм load_prices(remote_data):
1. Старт — таблица по умолчанию (10 известных токенов)
2. Каждый валидный элемент фида перекрывает цену своего currency
3. Невалидные элементы пропускаются (остаётся цена по умолчанию)

Элемент валиден, если:
- соответствует контракту price_feed_entry (currency — непустая строка,
  price — число или строка)
- price разбирается в конечное число (числовые строки поддерживаются)
- price > 0

Функция чистая: без сетевых вызовов, без повторов, без побочных эффектов
кроме логирования.
"""

from typing import Any, Iterable, Mapping, Optional

from src.core.contracts import PriceFeedEntryValidator
from src.core.domain.price_table import PriceTable
from src.core.domain.token import TokenSymbol
from src.core.log import get_logger
from src.core.math.numerical_safeguards import parse_float

logger = get_logger(__name__)

_ENTRY_VALIDATOR = PriceFeedEntryValidator()


def parse_price_entry(entry: Any) -> Optional[tuple[TokenSymbol, float]]:
    """
    Разбор одного элемента фида цен.

    Args:
        entry: Элемент JSON-массива (ожидается {currency, price})

    Returns:
        (currency, price) или None, если элемент невалиден
    """
    if not _ENTRY_VALIDATOR.is_valid(entry):
        logger.debug("price entry skipped", reason="contract_violation", entry=entry)
        return None

    price = parse_float(entry["price"])
    if price is None:
        logger.debug("price entry skipped", reason="unparsable_price", entry=entry)
        return None

    if price <= 0:
        logger.debug("price entry skipped", reason="non_positive_price", entry=entry)
        return None

    return entry["currency"], price


def load_prices(remote_data: Optional[Iterable[Mapping[str, Any]]] = None) -> PriceTable:
    """
    Таблица цен: значения по умолчанию, перекрытые валидными ценами фида.

    Args:
        remote_data: Список {currency, price} из источника цен; может
            отсутствовать (None), быть частичным или повреждённым

    Returns:
        PriceTable — никогда не пустая (минимум таблица по умолчанию)

    Examples:
        >>> load_prices([{"currency": "ETH", "price": "2500"}]).price_of("ETH")
        2500.0
    """
    table = PriceTable.default()
    if remote_data is None:
        return table

    if isinstance(remote_data, (str, bytes, Mapping)) or not isinstance(remote_data, Iterable):
        logger.warning(
            "malformed price payload, using defaults",
            payload_type=type(remote_data).__name__,
        )
        return table

    overlay: dict[TokenSymbol, float] = {}
    skipped = 0
    for entry in remote_data:
        parsed = parse_price_entry(entry)
        if parsed is None:
            skipped += 1
            continue
        currency, price = parsed
        # Повтор currency в фиде: побеждает последний элемент
        overlay[currency] = price

    logger.info("price table merged", overlaid=len(overlay), skipped=skipped)
    return table.with_overlay(overlay)
