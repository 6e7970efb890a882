"""Equality Dispatcher — структурное равенство equals(x, y).

Порядок выбора правила:
1. Пользовательское правило из активного реестра для (type(x), type(y))
2. Встроенное правило категории, если категории операндов совпадают
3. Общее правило (ANY)

Правила категорий:
- NUMBER: точное ==, либо a == b or abs(a - b) < epsilon
- CHARACTER / TEXT: по кодовым точкам, case-folding при case_sensitive=False
- CONS: рекурсивно по всей цепочке/дереву, всегда глубоко
- ARRAY: ранг, размеры по осям, затем элементы по логическому линейному индексу
- STRUCTURE / INSTANCE / SYMBOL: только идентичность
- HASH_TABLE: идентичность; число записей; ключи (by_key); мультимножество
  значений (by_value); структурные свойства (check_properties)

ОГРАНИЧЕНИЕ: циклы не детектируются, сравнение циклических cons-структур
и объектных массивов не завершается.
"""

from typing import Any, Callable, Dict, Mapping, Optional, Union

import numpy as np

from src.core.contracts.options import DEFAULT_OPTIONS, ComparisonOptions, make_options
from src.core.domain.category import Category, categorize
from src.core.domain.character import Char
from src.core.domain.cons import Cons
from src.core.domain.hash_table import table_properties
from src.core.math.numerical_safeguards import within_tolerance
from src.dispatch.registry import DispatchRegistry, current_registry, using_registry

EqualityRule = Callable[[Any, Any, ComparisonOptions], bool]


# =============================================================================
# PUBLIC API
# =============================================================================


def equals(
    x: Any,
    y: Any,
    *,
    options: Union[ComparisonOptions, Mapping[str, Any], None] = None,
    registry: Optional[DispatchRegistry] = None,
    **option_overrides: Any,
) -> bool:
    """Структурное равенство двух значений.

    Args:
        x: левый операнд
        y: правый операнд
        options: опции сравнения или JSON-объект конфигурации (default: DEFAULT_OPTIONS)
        registry: реестр пользовательских правил (default: активный)
        **option_overrides: recursive, epsilon, case_sensitive,
            by_key, by_value, check_properties

    Returns:
        True если значения равны по правилу их категории

    Raises:
        InvalidOptionError: если опции невалидны

    Examples:
        >>> equals("Abc", "abc", case_sensitive=False)
        True
        >>> equals(1.0, 1.05, epsilon=0.1)
        True
    """
    opts = make_options(options, **option_overrides)
    with using_registry(registry):
        return dispatch_equal(x, y, opts)


def not_equals(x: Any, y: Any, **kwargs: Any) -> bool:
    """Отрицание equals с теми же аргументами."""
    return not equals(x, y, **kwargs)


def dispatch_equal(x: Any, y: Any, options: ComparisonOptions) -> bool:
    """Выбор и применение правила равенства (опции уже провалидированы).

    Точка входа для рекурсивных вызовов и пользовательских правил.
    """
    rule = current_registry().resolve_equality(type(x), type(y))
    if rule is not None:
        return bool(rule(x, y, options))

    left, right = categorize(x), categorize(y)
    if left is right:
        return _CATEGORY_RULES.get(left, _generic_equal)(x, y, options)
    if left is Category.SYMBOL or right is Category.SYMBOL:
        # Токены равны только себе
        return False
    return _generic_equal(x, y, options)


# =============================================================================
# CATEGORY RULES
# =============================================================================


def _numbers_equal(x: Any, y: Any, options: ComparisonOptions) -> bool:
    if options.epsilon is None:
        return bool(x == y)
    return bool(within_tolerance(x, y, options.epsilon))


def _chars_equal(x: Char, y: Char, options: ComparisonOptions) -> bool:
    if options.case_sensitive:
        return x.code == y.code
    return x.folded() == y.folded()


def _texts_equal(x: str, y: str, options: ComparisonOptions) -> bool:
    if options.case_sensitive:
        return x == y
    return x.casefold() == y.casefold()


def _conses_equal(x: Cons, y: Cons, options: ComparisonOptions) -> bool:
    # Всегда глубоко, независимо от options.recursive.
    # По cdr идём циклом, по car рекурсией.
    while isinstance(x, Cons) and isinstance(y, Cons):
        if x is y:
            return True
        if not dispatch_equal(x.car, y.car, options):
            return False
        x, y = x.cdr, y.cdr
    return dispatch_equal(x, y, options)


def _arrays_equal(x: np.ndarray, y: np.ndarray, options: ComparisonOptions) -> bool:
    if x is y:
        return True
    if x.ndim != y.ndim or x.shape != y.shape:
        return False
    # .flat обходит логический порядок (C), не зависящий от раскладки в памяти
    for a, b in zip(x.flat, y.flat):
        if a is b:
            continue
        if not dispatch_equal(a, b, options):
            return False
    return True


def _identical(x: Any, y: Any, options: ComparisonOptions) -> bool:
    return x is y


def _tables_equal(x: Any, y: Any, options: ComparisonOptions) -> bool:
    if x is y:
        return True
    if len(x) != len(y):
        return False
    if options.by_key and not (
        _keys_covered(x, y, options) and _keys_covered(y, x, options)
    ):
        return False
    if options.by_value and not _same_value_multiset(x, y, options):
        return False
    if options.check_properties and table_properties(x) != table_properties(y):
        return False
    return True


def _keys_covered(x: Any, y: Any, options: ComparisonOptions) -> bool:
    """Каждый ключ x имеет равный ключ в y."""
    other_keys = list(y.keys())
    for key in x.keys():
        if not any(key is other or dispatch_equal(key, other, options) for other in other_keys):
            return False
    return True


def _same_value_multiset(x: Any, y: Any, options: ComparisonOptions) -> bool:
    """Значения x и y можно разбить на пары равных (полное паросочетание)."""
    left, right = list(x.values()), list(y.values())

    def same(a: Any, b: Any) -> bool:
        return a is b or dispatch_equal(a, b, options)

    # Жадный проход: если он нашёл пару каждому значению, ответ уже известен
    remaining = list(right)
    for value in left:
        for i, other in enumerate(remaining):
            if same(value, other):
                del remaining[i]
                break
        else:
            break
    else:
        return True

    # С epsilon равенство нетранзитивно, и жадный выбор может ошибиться:
    # полное паросочетание ищем увеличивающими путями.
    edges = [[j for j, other in enumerate(right) if same(value, other)] for value in left]
    if any(not adjacent for adjacent in edges):
        return False
    return _has_perfect_matching(edges, len(right))


def _has_perfect_matching(edges: list, right_count: int) -> bool:
    """Паросочетание, покрывающее все левые вершины (Kuhn, обход в ширину)."""
    match_right: list = [None] * right_count
    match_left: list = [None] * len(edges)
    for start in range(len(edges)):
        # parent[j]: левая вершина, из которой достигнута правая j
        parent: Dict[int, int] = {}
        queue = [start]
        free = None
        while queue and free is None:
            next_queue = []
            for u in queue:
                for j in edges[u]:
                    if j in parent:
                        continue
                    parent[j] = u
                    if match_right[j] is None:
                        free = j
                        break
                    next_queue.append(match_right[j])
                if free is not None:
                    break
            queue = next_queue
        if free is None:
            return False
        # Разворот чередующегося пути
        j = free
        while j is not None:
            u = parent[j]
            previous = match_left[u]
            match_right[j], match_left[u] = u, j
            j = previous
    return True


def _generic_equal(x: Any, y: Any, options: ComparisonOptions) -> bool:
    """Общее правило: значение + форма, без учёта опций."""
    if x is y:
        return True
    if isinstance(x, np.ndarray) or isinstance(y, np.ndarray):
        return False
    if isinstance(x, list) and isinstance(y, list) or (
        isinstance(x, tuple) and isinstance(y, tuple)
    ):
        if len(x) != len(y):
            return False
        return all(
            dispatch_equal(a, b, DEFAULT_OPTIONS) for a, b in zip(x, y)
        )
    if isinstance(x, (list, tuple)) or isinstance(y, (list, tuple)):
        return False
    return bool(x == y)


_CATEGORY_RULES: Dict[Category, EqualityRule] = {
    Category.NUMBER: _numbers_equal,
    Category.CHARACTER: _chars_equal,
    Category.TEXT: _texts_equal,
    Category.CONS: _conses_equal,
    Category.ARRAY: _arrays_equal,
    Category.STRUCTURE: _identical,
    Category.INSTANCE: _identical,
    Category.HASH_TABLE: _tables_equal,
    Category.SYMBOL: _identical,
    Category.ANY: _generic_equal,
}
