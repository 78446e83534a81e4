"""
Тесты для валидации перевода и допуска обмена

Проверяет:
1. validate_transfer: отрицательная сумма, NaN/Inf, превышение баланса, граница
2. can_swap: нулевая сумма и одинаковые токены поверх validate_transfer
3. Отсутствие мутаций балансов
"""

import math

import pytest

from src.core.domain import BalanceSheet
from src.swap.validation import (
    REJECTION_MESSAGES,
    TransferRejection,
    can_swap,
    validate_transfer,
)


@pytest.fixture
def balances() -> BalanceSheet:
    return BalanceSheet.from_mapping({"SWTH": 1000.0, "ETH": 5.0})


class TestValidateTransfer:
    """Тесты для validate_transfer"""

    @pytest.mark.parametrize(
        "balances_map", [{}, {"ETH": 0.0}, {"ETH": 5.0}, {"ETH": 1e9}]
    )
    def test_negative_regardless_of_balances(self, balances_map) -> None:
        result = validate_transfer(-1.0, "ETH", balances_map)
        assert not result.allowed
        assert result.rejection == TransferRejection.NEGATIVE_AMOUNT
        assert result.message == "Amount must be positive"

    def test_negative_infinity_is_negative(self, balances: BalanceSheet) -> None:
        result = validate_transfer(-math.inf, "ETH", balances)
        assert result.rejection == TransferRejection.NEGATIVE_AMOUNT

    @pytest.mark.parametrize("amount", [math.nan, math.inf])
    def test_non_finite_invalid(self, balances: BalanceSheet, amount: float) -> None:
        result = validate_transfer(amount, "ETH", balances)
        assert not result.allowed
        assert result.rejection == TransferRejection.INVALID_AMOUNT

    def test_over_balance_insufficient(self, balances: BalanceSheet) -> None:
        result = validate_transfer(6.0, "ETH", balances)
        assert not result.allowed
        assert result.rejection == TransferRejection.INSUFFICIENT_BALANCE
        assert result.block_reason == "insufficient_balance"
        assert result.balance == 5.0
        assert result.message == "Insufficient balance"

    def test_exact_balance_allowed(self, balances: BalanceSheet) -> None:
        """Граница включительно: amount == balance допустим"""
        result = validate_transfer(5.0, "ETH", balances)
        assert result.allowed
        assert result.rejection is None
        assert result.block_reason == ""
        assert result.message == ""
        assert "PASS" in result.details

    def test_zero_allowed(self, balances: BalanceSheet) -> None:
        assert validate_transfer(0.0, "ETH", balances).allowed

    def test_unknown_token_zero_balance(self, balances: BalanceSheet) -> None:
        assert validate_transfer(0.0, "BTC", balances).allowed
        result = validate_transfer(0.1, "BTC", balances)
        assert result.rejection == TransferRejection.INSUFFICIENT_BALANCE
        assert result.balance == 0.0

    def test_plain_mapping_accepted(self) -> None:
        assert validate_transfer(1.0, "ETH", {"ETH": 1.0}).allowed
        assert not validate_transfer(1.5, "ETH", {"ETH": 1.0}).allowed

    def test_balances_not_mutated(self, balances: BalanceSheet) -> None:
        before = balances.snapshot()
        for amount in (-1.0, 0.0, 5.0, 6.0, math.nan):
            validate_transfer(amount, "ETH", balances)
        assert balances.snapshot() == before


class TestCanSwap:
    """Тесты для can_swap"""

    def test_allowed(self, balances: BalanceSheet) -> None:
        result = can_swap("SWTH", "ETH", 100.0, balances)
        assert result.allowed

    def test_zero_amount(self, balances: BalanceSheet) -> None:
        result = can_swap("SWTH", "ETH", 0.0, balances)
        assert result.rejection == TransferRejection.ZERO_AMOUNT
        assert result.message == "Enter an amount"

    def test_same_token(self, balances: BalanceSheet) -> None:
        result = can_swap("ETH", "ETH", 1.0, balances)
        assert result.rejection == TransferRejection.SAME_TOKEN
        assert result.message == "Select different tokens"

    def test_transfer_rejection_first(self, balances: BalanceSheet) -> None:
        """Ошибки суммы проверяются раньше, чем совпадение токенов"""
        assert can_swap("ETH", "ETH", -1.0, balances).rejection == TransferRejection.NEGATIVE_AMOUNT
        assert (
            can_swap("ETH", "ETH", 10.0, balances).rejection
            == TransferRejection.INSUFFICIENT_BALANCE
        )

    def test_zero_before_same_token(self, balances: BalanceSheet) -> None:
        assert can_swap("ETH", "ETH", 0.0, balances).rejection == TransferRejection.ZERO_AMOUNT


class TestRejectionMessages:
    """Каждая причина отказа имеет сообщение"""

    def test_all_rejections_have_messages(self) -> None:
        assert set(REJECTION_MESSAGES) == set(TransferRejection)

    def test_rejection_values_are_codes(self) -> None:
        assert TransferRejection.NEGATIVE_AMOUNT.value == "negative_amount"
        assert TransferRejection.SAME_TOKEN == "same_token"
