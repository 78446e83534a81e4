"""SwapForm — состояние формы обмена без привязки к DOM

Повторяет обработчики формы обмена:
- ввод суммы "отдаю" → пересчёт "получаю" (и обратно)
- выбор токена для каждой стороны, разворот направления, MAX
- ошибки полей, состояние кнопки, строка курса и комиссии
- отправка формы → ConversionEngine.apply_swap

Отрисовка, модальные окна, debounce/throttle событий — забота UI.
Все суммы хранятся как float без округления; округление — только в *_label().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from src.core.domain.swap import SwapRecord, SwapRequest
from src.core.domain.token import (
    DEFAULT_FROM_TOKEN,
    DEFAULT_TO_TOKEN,
    DEFAULT_TOKENS,
    Token,
    TokenSymbol,
    search_tokens,
    validate_token_symbol,
)
from src.core.log import get_logger
from src.core.math.conversion import convert_reverse, format_exchange_rate
from src.core.math.numerical_safeguards import format_amount, parse_float
from src.swap.engine import ConversionEngine
from src.swap.fees import format_network_fee
from src.swap.validation import REJECTION_MESSAGES, TransferRejection, can_swap, validate_transfer

logger = get_logger(__name__)


class TokenSide(str, Enum):
    """Сторона формы."""

    FROM = "from"
    TO = "to"


@dataclass(frozen=True)
class ButtonState:
    """Текст и доступность кнопки обмена."""

    label: str
    enabled: bool


class SwapForm:
    """Состояние формы обмена поверх движка."""

    def __init__(
        self,
        engine: ConversionEngine,
        from_token: TokenSymbol = DEFAULT_FROM_TOKEN,
        to_token: TokenSymbol = DEFAULT_TO_TOKEN,
        tokens: tuple[Token, ...] = DEFAULT_TOKENS,
    ):
        self.engine = engine
        self.tokens = tokens
        self.from_token = validate_token_symbol(from_token)
        self.to_token = validate_token_symbol(to_token)
        self.from_amount = 0.0
        self.to_amount = 0.0
        self.is_submitting = False

    # -------------------------------------------------------------------------
    # Ввод
    # -------------------------------------------------------------------------

    def set_from_amount(self, text: str) -> None:
        """Ввод в поле "отдаю"; неразбираемый ввод считается нулём."""
        parsed = parse_float(text)
        self.from_amount = parsed if parsed is not None else 0.0
        self._recompute_to_amount()

    def set_to_amount(self, text: str) -> None:
        """Ввод в поле "получаю": пересчёт суммы "отдаю" обратной конверсией."""
        parsed = parse_float(text)
        self.to_amount = parsed if parsed is not None else 0.0
        self.from_amount = convert_reverse(
            self.to_amount, self.from_token, self.to_token, self.engine.prices
        )

    def select_token(self, side: TokenSide, symbol: TokenSymbol) -> None:
        validate_token_symbol(symbol)
        if side == TokenSide.FROM:
            self.from_token = symbol
        else:
            self.to_token = symbol
        self._recompute_to_amount()

    def flip(self) -> None:
        """Разворот направления: сумма "отдаю" сохраняется, "получаю" пересчитывается."""
        self.from_token, self.to_token = self.to_token, self.from_token
        self._recompute_to_amount()

    def set_max(self) -> None:
        self.from_amount = self.engine.max_amount(self.from_token)
        self._recompute_to_amount()

    def token_choices(self, term: str = "") -> list[Token]:
        """Токены для окна выбора, отфильтрованные строкой поиска."""
        return search_tokens(term, self.tokens)

    def _recompute_to_amount(self) -> None:
        self.to_amount = self.engine.convert(self.from_amount, self.from_token, self.to_token)

    # -------------------------------------------------------------------------
    # Отображение
    # -------------------------------------------------------------------------

    def field_errors(self) -> dict[TokenSide, str]:
        """Ошибки полей: недостаточный баланс / отрицательная сумма."""
        from_check = validate_transfer(self.from_amount, self.from_token, self.engine.balances)
        to_error = ""
        if self.to_amount < 0:
            to_error = REJECTION_MESSAGES[TransferRejection.NEGATIVE_AMOUNT]
        return {TokenSide.FROM: from_check.message, TokenSide.TO: to_error}

    def button_state(self) -> ButtonState:
        if self.is_submitting:
            return ButtonState(label="", enabled=False)
        check = can_swap(self.from_token, self.to_token, self.from_amount, self.engine.balances)
        if not check.allowed:
            return ButtonState(label=check.message, enabled=False)
        return ButtonState(label=f"Swap {self.from_token} for {self.to_token}", enabled=True)

    def exchange_rate_label(self) -> str:
        return format_exchange_rate(
            self.from_token,
            self.to_token,
            self.engine.prices,
            self.engine.config.amount_display_decimals,
        )

    def network_fee_label(self) -> str:
        return format_network_fee(self.from_token)

    def amount_labels(self) -> tuple[str, str]:
        decimals = self.engine.config.amount_display_decimals
        return format_amount(self.from_amount, decimals), format_amount(self.to_amount, decimals)

    def balance_labels(self) -> tuple[str, str]:
        decimals = self.engine.config.balance_display_decimals
        return (
            format_amount(self.engine.balance_of(self.from_token), decimals),
            format_amount(self.engine.balance_of(self.to_token), decimals),
        )

    # -------------------------------------------------------------------------
    # Отправка
    # -------------------------------------------------------------------------

    async def submit(self) -> Optional[SwapRecord]:
        """
        Отправка формы.

        Returns:
            Запись обмена от движка или None, если кнопка недоступна
            (форма ничего не отправляет, как и заблокированная кнопка)
        """
        if not self.button_state().enabled:
            logger.info(
                "submit ignored, button disabled",
                from_token=self.from_token,
                to_token=self.to_token,
                from_amount=self.from_amount,
            )
            return None

        request = SwapRequest(
            from_token=self.from_token, to_token=self.to_token, from_amount=self.from_amount
        )
        self.is_submitting = True
        try:
            record = await self.engine.apply_swap(request)
        finally:
            self.is_submitting = False

        if record.is_success:
            self.from_amount = 0.0
            self.to_amount = 0.0
        return record
