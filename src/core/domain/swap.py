"""
Swap — Модели запроса и записи обмена

SwapRequest: что пользователь хочет обменять.
SwapRecord: результат попытки обмена (успешной или отклонённой) для
истории транзакций. Обе модели неизменяемы (frozen=True).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from src.core.domain.token import TokenSymbol, validate_token_symbol


# =============================================================================
# ENUMS
# =============================================================================


class SwapStatus(str, Enum):
    """Статус попытки обмена."""

    SUCCESS = "success"
    FAILED = "failed"


# =============================================================================
# SWAP REQUEST
# =============================================================================


class SwapRequest(BaseModel):
    """
    Запрос на обмен from_amount токена from_token на to_token.

    Сумма to_amount в запросе не фиксируется: она вычисляется по ценам,
    актуальным на момент применения обмена.
    """

    from_token: TokenSymbol = Field(..., min_length=1, description="Списываемый токен")
    to_token: TokenSymbol = Field(..., min_length=1, description="Получаемый токен")
    from_amount: float = Field(
        ..., allow_inf_nan=False, description="Списываемая сумма (проверяется движком)"
    )

    model_config = {"frozen": True}

    @field_validator("from_token", "to_token")
    @classmethod
    def validate_symbols(cls, v: str) -> str:
        return validate_token_symbol(v)


# =============================================================================
# SWAP RECORD
# =============================================================================


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SwapRecord(BaseModel):
    """
    Запись истории обменов.

    Создаётся на каждую попытку обмена:
    - status=success: балансы изменены, to_amount — фактически зачисленная сумма
    - status=failed: балансы не тронуты, to_amount = 0, failure_reason — код отказа
    """

    from_token: TokenSymbol = Field(..., min_length=1)
    from_amount: float = Field(..., allow_inf_nan=False)
    to_token: TokenSymbol = Field(..., min_length=1)
    to_amount: float = Field(..., ge=0, allow_inf_nan=False)
    status: SwapStatus
    timestamp: datetime = Field(default_factory=_utc_now)
    failure_reason: Optional[str] = Field(
        None, description="Код отказа (только для status=failed)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_status_consistency(self) -> "SwapRecord":
        """Отказ всегда с причиной, успех — без причины и с неотрицательной суммой."""
        if self.status == SwapStatus.FAILED and not self.failure_reason:
            raise ValueError("failed swap record requires failure_reason")
        if self.status == SwapStatus.SUCCESS:
            if self.failure_reason is not None:
                raise ValueError("successful swap record must not carry failure_reason")
            if self.from_amount < 0:
                raise ValueError(f"from_amount must be non-negative, got {self.from_amount}")
        return self

    @property
    def is_success(self) -> bool:
        return self.status == SwapStatus.SUCCESS

    def summary(self) -> str:
        """Строка для списка транзакций: '100.0 SWTH → 0.005 ETH'."""
        return f"{self.from_amount} {self.from_token} → {self.to_amount} {self.to_token}"

    def to_payload(self) -> dict[str, Any]:
        """JSON-совместимое представление (см. контракт swap_record)."""
        return self.model_dump(mode="json")
