"""Relational Predicates — <, <=, >, >= поверх compare.

Каждый предикат вызывает compare и интерпретирует результат.
UNORDERED — ошибка UnorderableOperandsError с обоими операндами:
вызывающий код должен перехватить её или не сравнивать неупорядоченные
значения.
"""

from typing import Any, FrozenSet

from src.dispatch.ordering import Ordering, compare


class UnorderableOperandsError(TypeError):
    """Операнды не упорядочены (compare вернул UNORDERED)."""

    def __init__(self, left: Any, right: Any):
        self.left = left
        self.right = right
        super().__init__(f"unorderable operands: {left!r} and {right!r}")


def _ordered(x: Any, y: Any, accepted: FrozenSet[Ordering], options: dict) -> bool:
    result = compare(x, y, **options)
    if result is Ordering.UNORDERED:
        raise UnorderableOperandsError(x, y)
    return result in accepted


_LESS = frozenset({Ordering.LESS})
_LESS_OR_EQUAL = frozenset({Ordering.LESS, Ordering.EQUAL})
_GREATER = frozenset({Ordering.GREATER})
_GREATER_OR_EQUAL = frozenset({Ordering.GREATER, Ordering.EQUAL})


def strict_less(x: Any, y: Any, **options: Any) -> bool:
    """x < y.

    Raises:
        UnorderableOperandsError: если x и y не упорядочены
    """
    return _ordered(x, y, _LESS, options)


def less_or_equal(x: Any, y: Any, **options: Any) -> bool:
    """x <= y.

    Raises:
        UnorderableOperandsError: если x и y не упорядочены
    """
    return _ordered(x, y, _LESS_OR_EQUAL, options)


def strict_greater(x: Any, y: Any, **options: Any) -> bool:
    """x > y.

    Raises:
        UnorderableOperandsError: если x и y не упорядочены
    """
    return _ordered(x, y, _GREATER, options)


def greater_or_equal(x: Any, y: Any, **options: Any) -> bool:
    """x >= y.

    Raises:
        UnorderableOperandsError: если x и y не упорядочены
    """
    return _ordered(x, y, _GREATER_OR_EQUAL, options)


def minimum(*values: Any, **options: Any) -> Any:
    """Наименьшее из значений (первое при равенстве).

    Raises:
        ValueError: если значений нет
        UnorderableOperandsError: если какая-то пара не упорядочена
    """
    if not values:
        raise ValueError("minimum() requires at least one value")
    result = values[0]
    for value in values[1:]:
        if strict_less(value, result, **options):
            result = value
    return result


def maximum(*values: Any, **options: Any) -> Any:
    """Наибольшее из значений (первое при равенстве).

    Raises:
        ValueError: если значений нет
        UnorderableOperandsError: если какая-то пара не упорядочена
    """
    if not values:
        raise ValueError("maximum() requires at least one value")
    result = values[0]
    for value in values[1:]:
        if strict_greater(value, result, **options):
            result = value
    return result
