"""
SwapHistory — Ограниченная история обменов

- Порядок: последняя запись первой
- Вместимость по умолчанию: 5 записей
- Вытеснение: при переполнении удаляется самая старая по порядку добавления
  (не по значению timestamp)
- Только добавление; удаление — только вытеснением
"""

from collections import deque
from typing import Iterator, Optional

from src.core.config import DEFAULT_HISTORY_CAPACITY
from src.core.domain.swap import SwapRecord


class SwapHistory:
    """Кольцевая история последних записей обмена."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._capacity = capacity
        # Левый край: самая новая запись; deque(maxlen) вытесняет справа
        self._records: deque[SwapRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, record: SwapRecord) -> Optional[SwapRecord]:
        """
        Добавление записи.

        Returns:
            Вытесненная запись или None
        """
        evicted = self._records[-1] if len(self._records) == self._capacity else None
        self._records.appendleft(record)
        return evicted

    def records(self) -> list[SwapRecord]:
        """Копия записей, последняя первой."""
        return list(self._records)

    def latest(self) -> Optional[SwapRecord]:
        return self._records[0] if self._records else None

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[SwapRecord]:
        return iter(list(self._records))
