"""
Conversion — Конверсия сумм между токенами по спот-ценам

Формулы (все цены в общей quote currency, USD):
    to_amount   = amount * price[from] / price[to]
    from_amount = to_amount * price[to] / price[from]     (обратное направление)
    rate        = price[from] / price[to]                 (1 from = rate to)

Отсутствующий в таблице токен получает нейтральную цену 1.0 — это
задокументированное деградированное поведение, а не ошибка.

Внутри модуля ничего не округляется: round-trip A → B → A возвращает
исходную сумму с точностью float. Округление до 6 знаков — только на выводе.
"""

from src.core.domain.price_table import NEUTRAL_PRICE, PriceTable
from src.core.domain.token import TokenSymbol
from src.core.log import get_logger
from src.core.math.numerical_safeguards import AMOUNT_DISPLAY_DECIMALS, format_amount

logger = get_logger(__name__)


def _resolve_price(symbol: TokenSymbol, prices: PriceTable) -> float:
    if not prices.has_price(symbol):
        logger.debug("unknown token, neutral price substituted", token=symbol, price=NEUTRAL_PRICE)
    return prices.price_of(symbol)


def convert(
    amount: float,
    from_token: TokenSymbol,
    to_token: TokenSymbol,
    prices: PriceTable,
) -> float:
    """
    Конверсия суммы from_token → to_token.

    Args:
        amount: Сумма в from_token
        from_token: Исходный токен
        to_token: Целевой токен
        prices: Таблица спот-цен

    Returns:
        Эквивалентная сумма в to_token (без округления)

    Examples:
        >>> convert(100.0, "SWTH", "ETH", PriceTable(prices={"SWTH": 0.1, "ETH": 2000.0}))
        0.005
    """
    from_price = _resolve_price(from_token, prices)
    to_price = _resolve_price(to_token, prices)
    return amount * from_price / to_price


def convert_reverse(
    to_amount: float,
    from_token: TokenSymbol,
    to_token: TokenSymbol,
    prices: PriceTable,
) -> float:
    """
    Обратная конверсия: сколько from_token нужно, чтобы получить to_amount.

    Используется, когда пользователь редактирует поле "получаю".
    """
    return convert(to_amount, to_token, from_token, prices)


def exchange_rate(from_token: TokenSymbol, to_token: TokenSymbol, prices: PriceTable) -> float:
    """
    Курс обмена: сколько to_token даётся за 1 from_token.

    Returns:
        price[from] / price[to]
    """
    return _resolve_price(from_token, prices) / _resolve_price(to_token, prices)


def format_exchange_rate(
    from_token: TokenSymbol,
    to_token: TokenSymbol,
    prices: PriceTable,
    decimals: int = AMOUNT_DISPLAY_DECIMALS,
) -> str:
    """
    Строка курса для отображения.

    Examples:
        >>> format_exchange_rate("SWTH", "ETH", PriceTable.default())
        '1 SWTH = 0.000050 ETH'
    """
    rate = exchange_rate(from_token, to_token, prices)
    return f"1 {from_token} = {format_amount(rate, decimals)} {to_token}"
