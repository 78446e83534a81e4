"""
Numerical Safeguards — безопасные примитивы для сумм и цен

Модуль обеспечивает численную устойчивость операций движка обмена:
- Проверка валидности float (NaN/Inf никогда не попадают в балансы и цены)
- Разбор чисел из внешних источников (фид цен, ввод формы)
- Epsilon-сравнения с нулём
- Округление и форматирование только для отображения

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Внутренние вычисления не округляются (округление — только на выводе)
2. NaN/Inf никогда не пропагируют (разбор возвращает None)
3. Все операции детерминированы и воспроизводимы
"""

import math
import re
from typing import Any, Final, Optional

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Epsilon для количеств токенов
# Используется для проверки "нулевой" суммы обмена
EPS_QTY: Final[float] = 1e-12

# Допуск round-trip конверсии A → B → A
ROUND_TRIP_TOLERANCE: Final[float] = 1e-6

# Количество знаков для сумм и курса на экране
AMOUNT_DISPLAY_DECIMALS: Final[int] = 6

# Количество знаков для балансов на экране
BALANCE_DISPLAY_DECIMALS: Final[int] = 4

# Префикс числа в духе parseFloat: "12.5abc" → 12.5
_LEADING_NUMBER_RE: Final[re.Pattern[str]] = re.compile(
    r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)


# =============================================================================
# ВАЛИДНОСТЬ И РАЗБОР
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечное, False если NaN или Inf
    """
    return math.isfinite(value)


def parse_float(value: Any) -> Optional[float]:
    """
    Разбор числа из внешнего значения.

    Поддерживает int/float и строки (в том числе числовые строки из фида цен
    вида "2500" и ввод формы вида "12.5abc" — берётся числовой префикс).
    bool не считается числом.

    Args:
        value: Значение из JSON или поля ввода

    Returns:
        Конечный float или None, если разобрать не удалось

    Examples:
        >>> parse_float("2500")
        2500.0
        >>> parse_float(" 0.5 ")
        0.5
        >>> parse_float("abc") is None
        True
        >>> parse_float(float("nan")) is None
        True
    """
    if isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError:
            # int из JSON длиннее диапазона float
            return None
    elif isinstance(value, str):
        match = _LEADING_NUMBER_RE.match(value.strip())
        if match is None:
            return None
        result = float(match.group(0))
    else:
        return None

    if not is_valid_float(result):
        return None
    return result


def is_zero(value: float, tol: float = EPS_QTY) -> bool:
    """
    Проверка, близко ли значение к нулю с учётом толерантности.

    Args:
        value: Проверяемое значение
        tol: Абсолютная толерантность (default: EPS_QTY)

    Returns:
        True если abs(value) <= tol
    """
    return abs(value) <= tol


# =============================================================================
# ФОРМАТИРОВАНИЕ ДЛЯ ОТОБРАЖЕНИЯ
# =============================================================================


def format_amount(value: float, decimals: int = AMOUNT_DISPLAY_DECIMALS) -> str:
    """
    Форматирование суммы с фиксированным числом знаков.

    Только для вывода: результат не должен участвовать в дальнейших
    вычислениях, иначе ошибка округления накапливается.

    Examples:
        >>> format_amount(0.005)
        '0.005000'
        >>> format_amount(900.0, 4)
        '900.0000'
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    return f"{value:.{decimals}f}"


# =============================================================================
# ВАЛИДАЦИЯ И ПРОВЕРКИ
# =============================================================================


def validate_positive(value: float, name: str) -> None:
    """
    Валидация, что значение положительное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value <= 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    """
    Валидация, что значение неотрицательное.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Raises:
        ValueError: Если value < 0 или NaN/Inf
    """
    if not is_valid_float(value):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {value}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")
