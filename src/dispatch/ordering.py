"""Ordering Dispatcher — четырёхзначное сравнение compare(x, y).

Результат — один из Ordering: LESS, GREATER, EQUAL, UNORDERED.

Правило по умолчанию: EQUAL если equals(x, y) с теми же опциями,
иначе UNORDERED. Так порядок согласован с равенством для любых
категорий без собственного порядка (cons, массивы, записи, таблицы).

Собственный порядок:
- NUMBER (только вещественные): точные < / > / ==, epsilon НЕ используется.
  Два числа в пределах epsilon могут быть равны по equals, но LESS/GREATER
  по compare — асимметрия сохраняется намеренно.
- CHARACTER: по кодовым точкам (case-folding при case_sensitive=False)
- TEXT: лексикографически (case-folding при case_sensitive=False)
- SYMBOL: EQUAL только для идентичных, иначе UNORDERED
"""

from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

from src.core.contracts.options import ComparisonOptions, make_options
from src.core.domain.category import Category, categorize
from src.core.domain.character import Char
from src.core.math.numerical_safeguards import (
    SIGN_EQUAL,
    SIGN_GREATER,
    SIGN_LESS,
    exact_sign,
    is_real,
)
from src.dispatch.equality import dispatch_equal
from src.dispatch.registry import DispatchRegistry, current_registry, using_registry


class Ordering(str, Enum):
    """Результат сравнения."""

    LESS = "<"
    GREATER = ">"
    EQUAL = "="
    UNORDERED = "/="

    @classmethod
    def from_sign(cls, sign: Optional[int]) -> "Ordering":
        """Ordering из знака (-1 / 0 / +1); None — UNORDERED."""
        if sign is None:
            return cls.UNORDERED
        if sign < 0:
            return cls.LESS
        if sign > 0:
            return cls.GREATER
        return cls.EQUAL

    def reverse(self) -> "Ordering":
        """Порядок для переставленных операндов."""
        if self is Ordering.LESS:
            return Ordering.GREATER
        if self is Ordering.GREATER:
            return Ordering.LESS
        return self


OrderingRule = Callable[[Any, Any, ComparisonOptions], Ordering]


# =============================================================================
# PUBLIC API
# =============================================================================


def compare(
    x: Any,
    y: Any,
    *,
    options: Union[ComparisonOptions, Mapping[str, Any], None] = None,
    registry: Optional[DispatchRegistry] = None,
    **option_overrides: Any,
) -> Ordering:
    """Порядок двух значений.

    UNORDERED — нормальный результат, а не ошибка.

    Args:
        x: левый операнд
        y: правый операнд
        options: опции сравнения или JSON-объект конфигурации (default: DEFAULT_OPTIONS)
        registry: реестр пользовательских правил (default: активный)
        **option_overrides: recursive, case_sensitive и прочие опции,
            передаются в equals для правила по умолчанию

    Returns:
        Ordering

    Examples:
        >>> compare(3, 5)
        <Ordering.LESS: '<'>
        >>> compare("a", 3)
        <Ordering.UNORDERED: '/='>
    """
    opts = make_options(options, **option_overrides)
    with using_registry(registry):
        return dispatch_compare(x, y, opts)


def dispatch_compare(x: Any, y: Any, options: ComparisonOptions) -> Ordering:
    """Выбор и применение правила порядка (опции уже провалидированы)."""
    rule = current_registry().resolve_ordering(type(x), type(y))
    if rule is not None:
        return rule(x, y, options)

    left, right = categorize(x), categorize(y)
    if left is right:
        return _CATEGORY_RULES.get(left, _default_compare)(x, y, options)
    return _default_compare(x, y, options)


# =============================================================================
# CATEGORY RULES
# =============================================================================


def _default_compare(x: Any, y: Any, options: ComparisonOptions) -> Ordering:
    if dispatch_equal(x, y, options):
        return Ordering.EQUAL
    return Ordering.UNORDERED


def _numbers_compare(x: Any, y: Any, options: ComparisonOptions) -> Ordering:
    if not (is_real(x) and is_real(y)):
        # Комплексные числа не упорядочены
        return _default_compare(x, y, options)
    return Ordering.from_sign(exact_sign(x, y))


def _sign_of(a: Any, b: Any) -> int:
    if a < b:
        return SIGN_LESS
    if a > b:
        return SIGN_GREATER
    return SIGN_EQUAL


def _chars_compare(x: Char, y: Char, options: ComparisonOptions) -> Ordering:
    if options.case_sensitive:
        return Ordering.from_sign(_sign_of(x.code, y.code))
    return Ordering.from_sign(_sign_of(x.folded(), y.folded()))


def _texts_compare(x: str, y: str, options: ComparisonOptions) -> Ordering:
    if options.case_sensitive:
        return Ordering.from_sign(_sign_of(x, y))
    return Ordering.from_sign(_sign_of(x.casefold(), y.casefold()))


def _symbols_compare(x: Any, y: Any, options: ComparisonOptions) -> Ordering:
    if x is y:
        return Ordering.EQUAL
    return Ordering.UNORDERED


_CATEGORY_RULES: Dict[Category, OrderingRule] = {
    Category.NUMBER: _numbers_compare,
    Category.CHARACTER: _chars_compare,
    Category.TEXT: _texts_compare,
    Category.SYMBOL: _symbols_compare,
}
