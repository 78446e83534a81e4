"""Валидация перевода и допуска обмена

Проверки суммы перевода против баланса:
- amount < 0 → NEGATIVE_AMOUNT (независимо от балансов)
- amount NaN/+Inf → INVALID_AMOUNT
- amount > balance[token] (нет токена = баланс 0) → INSUFFICIENT_BALANCE
- иначе — допуск (граница включительно: amount == balance допустим)

can_swap дополнительно (порядок как у кнопки обмена в форме):
- нулевая сумма → ZERO_AMOUNT
- from_token == to_token → SAME_TOKEN

Отказ — это значение результата, а не исключение. Функции чистые:
балансы не изменяются.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Final, Mapping, Optional, Union

from src.core.domain.balance_sheet import BalanceSheet
from src.core.domain.token import TokenSymbol
from src.core.math.numerical_safeguards import is_valid_float, is_zero


# =============================================================================
# REJECTIONS
# =============================================================================


class TransferRejection(str, Enum):
    """Причина отказа в переводе/обмене."""

    NEGATIVE_AMOUNT = "negative_amount"
    INVALID_AMOUNT = "invalid_amount"
    INSUFFICIENT_BALANCE = "insufficient_balance"
    ZERO_AMOUNT = "zero_amount"
    SAME_TOKEN = "same_token"


# Сообщения для пользователя (поля ошибок и кнопка формы)
REJECTION_MESSAGES: Final[Mapping[TransferRejection, str]] = {
    TransferRejection.NEGATIVE_AMOUNT: "Amount must be positive",
    TransferRejection.INVALID_AMOUNT: "Amount must be a number",
    TransferRejection.INSUFFICIENT_BALANCE: "Insufficient balance",
    TransferRejection.ZERO_AMOUNT: "Enter an amount",
    TransferRejection.SAME_TOKEN: "Select different tokens",
}

Balances = Union[BalanceSheet, Mapping[TokenSymbol, float]]


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class TransferCheckResult:
    """Результат проверки перевода."""

    allowed: bool
    rejection: Optional[TransferRejection]

    # Входные параметры для диагностики
    token: TokenSymbol
    amount: float
    balance: float

    # Детали
    details: str

    @property
    def block_reason(self) -> str:
        """Код отказа или пустая строка при допуске."""
        return self.rejection.value if self.rejection is not None else ""

    @property
    def message(self) -> str:
        """Сообщение для пользователя или пустая строка при допуске."""
        return REJECTION_MESSAGES[self.rejection] if self.rejection is not None else ""


# =============================================================================
# CHECKS
# =============================================================================


def _balance_of(token: TokenSymbol, balances: Balances) -> float:
    if isinstance(balances, BalanceSheet):
        return balances.balance_of(token)
    return balances.get(token, 0.0)


def _rejected(
    rejection: TransferRejection, token: TokenSymbol, amount: float, balance: float, details: str
) -> TransferCheckResult:
    return TransferCheckResult(
        allowed=False,
        rejection=rejection,
        token=token,
        amount=amount,
        balance=balance,
        details=details,
    )


def validate_transfer(amount: float, token: TokenSymbol, balances: Balances) -> TransferCheckResult:
    """
    Проверка суммы перевода против баланса.

    Args:
        amount: Сумма перевода
        token: Списываемый токен
        balances: BalanceSheet или отображение {token: balance}

    Returns:
        TransferCheckResult с решением о допуске
    """
    balance = _balance_of(token, balances)

    # 1. Отрицательная сумма (включая -inf), балансы не важны
    if amount < 0:
        return _rejected(
            TransferRejection.NEGATIVE_AMOUNT, token, amount, balance,
            f"amount {amount} < 0",
        )

    # 2. NaN / +inf
    if not is_valid_float(amount):
        return _rejected(
            TransferRejection.INVALID_AMOUNT, token, amount, balance,
            f"amount {amount} is not a finite number",
        )

    # 3. Превышение баланса
    if amount > balance:
        return _rejected(
            TransferRejection.INSUFFICIENT_BALANCE, token, amount, balance,
            f"amount {amount} {token} > balance {balance} {token}",
        )

    return TransferCheckResult(
        allowed=True,
        rejection=None,
        token=token,
        amount=amount,
        balance=balance,
        details=f"PASS: amount {amount} {token} <= balance {balance} {token}",
    )


def can_swap(
    from_token: TokenSymbol,
    to_token: TokenSymbol,
    from_amount: float,
    balances: Balances,
) -> TransferCheckResult:
    """
    Допуск обмена на уровне формы.

    Порядок проверок:
    1. validate_transfer (отрицательная/невалидная сумма, баланс)
    2. Нулевая сумма
    3. Один и тот же токен с обеих сторон

    Returns:
        TransferCheckResult с решением о допуске
    """
    transfer = validate_transfer(from_amount, from_token, balances)
    if not transfer.allowed:
        return transfer

    if is_zero(from_amount):
        return _rejected(
            TransferRejection.ZERO_AMOUNT, from_token, from_amount, transfer.balance,
            "nothing to swap: amount is zero",
        )

    if from_token == to_token:
        return _rejected(
            TransferRejection.SAME_TOKEN, from_token, from_amount, transfer.balance,
            f"from_token and to_token are both {from_token}",
        )

    return transfer
