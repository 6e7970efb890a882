"""
Numerical Safeguards — примитивы числового сравнения

Модуль содержит числовые примитивы, на которых построены правила
равенства и упорядочивания для категории NUMBER:
- Проверка «вещественности» значения (numbers.Real, но не bool)
- Валидация толерантности epsilon (неотрицательное конечное вещественное)
- Сравнение с толерантностью: abs(a - b) < epsilon
- Точное трёхзначное сравнение (-1 / 0 / +1) без epsilon

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Без epsilon равенство точное (a == b), никаких неявных допусков
2. С epsilon равенство строгое: abs(a - b) < epsilon (epsilon=0 ничего не допускает)
3. Упорядочивание НЕ использует epsilon (асимметрия с равенством сохраняется)
4. NaN не упорядочен ни с чем, включая себя
"""

import math
import numbers
from typing import Final, Optional

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Результаты трёхзначного сравнения
SIGN_LESS: Final[int] = -1
SIGN_EQUAL: Final[int] = 0
SIGN_GREATER: Final[int] = 1


# =============================================================================
# ПРОВЕРКИ ТИПОВ
# =============================================================================


def is_number(value: object) -> bool:
    """
    Является ли значение числом для целей сравнения.

    bool исключён: True/False рассматриваются как атомарные токены,
    а не как 1/0.
    """
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def is_real(value: object) -> bool:
    """
    Является ли значение вещественным числом (допускает упорядочивание).

    Examples:
        >>> is_real(3)
        True
        >>> is_real(2.5)
        True
        >>> is_real(1 + 2j)
        False
        >>> is_real(True)
        False
    """
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_nan(value: object) -> bool:
    """Проверка на NaN для любого вещественного числа (float, Decimal, numpy)."""
    try:
        return value != value
    except TypeError:
        return False


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_tolerance(value: Optional[object], name: str = "epsilon") -> Optional[object]:
    """
    Валидация толерантности.

    Допустимо отсутствие значения (None) или неотрицательное конечное
    вещественное число.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        ValueError: Если value не вещественное, отрицательное, NaN или Inf
    """
    if value is None:
        return None

    if not is_real(value):
        raise ValueError(f"{name} must be a real number or None, got {value!r}")

    if is_nan(value) or math.isinf(value):
        raise ValueError(f"{name} must be finite, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value!r}")

    return value


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


def within_tolerance(a: numbers.Number, b: numbers.Number, epsilon: object) -> bool:
    """
    Равенство с толерантностью: a == b или abs(a - b) < epsilon.

    Точно равные значения равны при любом epsilon, включая 0, иначе
    порядок (EQUAL) и равенство разошлись бы. Увеличение epsilon никогда
    не превращает True в False.

    Examples:
        >>> within_tolerance(1.0, 1.05, 0.1)
        True
        >>> within_tolerance(1.0, 1.2, 0.1)
        False
        >>> within_tolerance(1, 1, 0)
        True
    """
    if a == b:
        return True
    try:
        return abs(a - b) < epsilon
    except TypeError:
        # Decimal и float не вычитаются друг из друга
        return abs(float(a) - float(b)) < float(epsilon)


def exact_sign(a: numbers.Real, b: numbers.Real) -> Optional[int]:
    """
    Точное трёхзначное сравнение без толерантности.

    Returns:
        -1 если a < b
         0 если a == b
        +1 если a > b
        None если значения не упорядочены (NaN)

    Examples:
        >>> exact_sign(3, 5)
        -1
        >>> exact_sign(5, 3)
        1
        >>> exact_sign(3, 3.0)
        0
        >>> exact_sign(float("nan"), 1) is None
        True
    """
    if a < b:
        return SIGN_LESS
    if a > b:
        return SIGN_GREATER
    if a == b:
        return SIGN_EQUAL
    return None
