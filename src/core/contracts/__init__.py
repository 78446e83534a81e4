"""
Contract Validation Module

Модуль для валидации JSON контрактов движка обмена.
"""

from .validators import (
    ContractValidator,
    PriceFeedEntryValidator,
    SchemaLoader,
    SwapRecordValidator,
    validate_price_feed_entry,
    validate_swap_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PriceFeedEntryValidator",
    "SwapRecordValidator",
    # Functions
    "validate_price_feed_entry",
    "validate_swap_record",
]
