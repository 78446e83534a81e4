"""
Core math modules

Численные примитивы для сумм и цен.

Конверсия между токенами — в src.core.math.conversion (зависит от
src.core.domain, поэтому здесь не реэкспортируется).
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    AMOUNT_DISPLAY_DECIMALS,
    BALANCE_DISPLAY_DECIMALS,
    EPS_QTY,
    ROUND_TRIP_TOLERANCE,
    format_amount,
    is_valid_float,
    is_zero,
    parse_float,
    validate_non_negative,
    validate_positive,
)

__all__ = [
    # Numerical Safeguards — Constants
    "AMOUNT_DISPLAY_DECIMALS",
    "BALANCE_DISPLAY_DECIMALS",
    "EPS_QTY",
    "ROUND_TRIP_TOLERANCE",
    # Numerical Safeguards — Functions
    "format_amount",
    "is_valid_float",
    "is_zero",
    "parse_float",
    "validate_non_negative",
    "validate_positive",
]
