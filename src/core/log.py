"""
Structured logging — key=value логгер поверх стандартного logging

Каждая запись рендерится как последовательность пар:
    event="swap applied" from_token="SWTH" to_token="ETH" session_id="..."

Контекст логгера (например, session_id движка) добавляется к каждой записи.
"""

import logging
import sys
from typing import Any, MutableMapping

# Ключи, которые logging.Logger принимает сам и которые нельзя превращать в пары
_RESERVED_KWARGS = ("exc_info", "extra", "stack_info", "stacklevel")


class KeyValueLogger(logging.LoggerAdapter):
    """
    LoggerAdapter, превращающий именованные аргументы в пары key="value".

    Пример:
        logger = get_logger(__name__, session_id="abc")
        logger.info("swap applied", from_token="SWTH", amount=100.0)
    """

    def __init__(self, logger: logging.Logger, **context: Any):
        super().__init__(logger, extra=context)

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[str, MutableMapping[str, Any]]:
        passthrough = {key: kwargs.pop(key) for key in _RESERVED_KWARGS if key in kwargs}
        pairs: dict[str, Any] = {"event": msg}
        pairs.update(kwargs)
        pairs.update(self.extra or {})
        rendered = " ".join(f'{key}="{value}"' for key, value in pairs.items())
        return rendered, passthrough

    def error(self, msg: Any, *args: Any, **kwargs: Any) -> None:
        """
        ERROR с автоматическим контекстом исключения.

        Если вызов происходит внутри except-блока, добавляются error_type
        и error_message, а traceback пишется через exception().
        """
        exc_type, exc_value, _ = sys.exc_info()
        if exc_type is not None:
            kwargs.setdefault("error_type", exc_type.__name__)
            kwargs.setdefault("error_message", exc_value)
            super().exception(msg, *args, **kwargs)
        else:
            super().error(msg, *args, **kwargs)

    def bind(self, **context: Any) -> "KeyValueLogger":
        """Новый адаптер с расширенным контекстом (исходный не меняется)."""
        return KeyValueLogger(self.logger, **{**(self.extra or {}), **context})


def get_logger(name: str, **context: Any) -> KeyValueLogger:
    """
    Фабрика логгеров проекта.

    Args:
        name: Имя логгера (обычно __name__)
        **context: Пары, добавляемые к каждой записи

    Returns:
        KeyValueLogger поверх logging.getLogger(name)
    """
    return KeyValueLogger(logging.getLogger(name), **context)
