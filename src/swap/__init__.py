"""Swap — валидация, история и движок обмена токенов.

- validation: validate_transfer / can_swap
- history: ограниченная история (5 записей, последняя первой)
- engine: ConversionEngine (цены, балансы, применение обмена)
- form: состояние формы обмена поверх движка
"""

from .engine import ConversionEngine, SwapQuote
from .fees import format_network_fee, network_fee_usd
from .form import ButtonState, SwapForm, TokenSide
from .history import SwapHistory
from .validation import (
    REJECTION_MESSAGES,
    TransferCheckResult,
    TransferRejection,
    can_swap,
    validate_transfer,
)

__all__ = [
    "ConversionEngine",
    "SwapQuote",
    "SwapHistory",
    "SwapForm",
    "ButtonState",
    "TokenSide",
    "TransferCheckResult",
    "TransferRejection",
    "REJECTION_MESSAGES",
    "can_swap",
    "validate_transfer",
    "format_network_fee",
    "network_fee_usd",
]
