"""
BalanceSheet — Балансы пользователя по токенам

Отображение TokenSymbol → неотрицательный баланс.

Инварианты:
- Баланс никогда не становится отрицательным: операция, которая привела бы
  к отрицательному балансу, отклоняется ДО любой мутации
- Отсутствующий токен имеет баланс 0.0
- Перевод (списание + зачисление) применяется атомарно
"""

from typing import Mapping

from pydantic import BaseModel, Field, field_validator

from src.core.domain.token import DEFAULT_BALANCES, TokenSymbol, validate_token_symbol
from src.core.math.numerical_safeguards import validate_non_negative


class BalanceSheet(BaseModel):
    """
    Изменяемый лист балансов одной сессии.

    Владелец — ConversionEngine. Внешний код получает только снапшоты
    (см. snapshot()).
    """

    balances: dict[TokenSymbol, float] = Field(
        default_factory=dict, description="Балансы по символу токена"
    )

    @field_validator("balances")
    @classmethod
    def validate_balances(cls, v: dict[str, float]) -> dict[str, float]:
        for symbol, amount in v.items():
            validate_token_symbol(symbol)
            validate_non_negative(amount, f"balance[{symbol}]")
        return v

    @classmethod
    def default(cls) -> "BalanceSheet":
        """Стартовые балансы сессии."""
        return cls(balances=dict(DEFAULT_BALANCES))

    @classmethod
    def from_mapping(cls, balances: Mapping[TokenSymbol, float]) -> "BalanceSheet":
        return cls(balances=dict(balances))

    def balance_of(self, symbol: TokenSymbol) -> float:
        """Баланс токена; 0.0 если токена нет в листе."""
        return self.balances.get(symbol, 0.0)

    def credit(self, symbol: TokenSymbol, amount: float) -> None:
        """
        Зачисление суммы на баланс.

        Raises:
            ValueError: Если сумма отрицательная или NaN/Inf
        """
        validate_token_symbol(symbol)
        validate_non_negative(amount, "credit amount")
        self.balances[symbol] = self.balance_of(symbol) + amount

    def debit(self, symbol: TokenSymbol, amount: float) -> None:
        """
        Списание суммы с баланса.

        Raises:
            ValueError: Если сумма некорректна или превышает баланс
        """
        validate_token_symbol(symbol)
        validate_non_negative(amount, "debit amount")
        balance = self.balance_of(symbol)
        if amount > balance:
            raise ValueError(
                f"debit {amount} {symbol} exceeds balance {balance} {symbol}"
            )
        self.balances[symbol] = balance - amount

    def apply_transfer(
        self,
        from_token: TokenSymbol,
        from_amount: float,
        to_token: TokenSymbol,
        to_amount: float,
    ) -> None:
        """
        Атомарный перевод: списание from_token и зачисление to_token.

        Все проверки выполняются до мутации: либо меняются оба баланса,
        либо ни один.

        Args:
            from_token: Списываемый токен
            from_amount: Списываемая сумма
            to_token: Зачисляемый токен
            to_amount: Зачисляемая сумма

        Raises:
            ValueError: Если суммы некорректны или списание превышает баланс
        """
        validate_token_symbol(from_token)
        validate_token_symbol(to_token)
        validate_non_negative(from_amount, "from_amount")
        validate_non_negative(to_amount, "to_amount")

        from_balance = self.balance_of(from_token)
        if from_amount > from_balance:
            raise ValueError(
                f"debit {from_amount} {from_token} exceeds balance {from_balance} {from_token}"
            )

        new_from_balance = from_balance - from_amount
        if from_token == to_token:
            # Обмен токена на самого себя: итог считается от уже списанного баланса
            self.balances[from_token] = new_from_balance + to_amount
            return

        new_to_balance = self.balance_of(to_token) + to_amount
        self.balances[from_token] = new_from_balance
        self.balances[to_token] = new_to_balance

    def snapshot(self) -> dict[TokenSymbol, float]:
        """Копия балансов (мутация копии не затрагивает лист)."""
        return dict(self.balances)
