"""Hash Contract — hash_code(value).

Контракт: если equals(a, b) с опциями по умолчанию, то
hash_code(a) == hash_code(b). Для нестандартных опций (epsilon,
case_sensitive=False) гарантии нет: один хеш не может согласоваться
сразу с несколькими отношениями эквивалентности.

Реализация по умолчанию — структурный хеш хоста:
- атомы (числа, символы, текст, токены): hash()
- записи (STRUCTURE / INSTANCE): по идентичности
- Cons: комбинация хешей по цепочке (циклом по cdr)
- массивы: форма + хеши элементов
- таблицы: число записей + хеши ключей без учёта порядка
- list / tuple / set: рекурсивно
Пользовательские типы переопределяют хеш через register_hash().
"""

from typing import Any, Optional

import numpy as np

from src.core.domain.category import Category, categorize
from src.core.domain.cons import Cons
from src.dispatch.registry import DispatchRegistry, current_registry, using_registry


def hash_code(value: Any, *, registry: Optional[DispatchRegistry] = None) -> int:
    """Структурный хеш, согласованный с equals при опциях по умолчанию.

    Examples:
        >>> hash_code(1) == hash_code(1.0)
        True
        >>> hash_code([1, "a"]) == hash_code([1, "a"])
        True
    """
    with using_registry(registry):
        return _hash(value)


def _hash(value: Any) -> int:
    rule = current_registry().resolve_hash(type(value))
    if rule is not None:
        return int(rule(value))

    category = categorize(value)
    if category is Category.CONS:
        return _hash_cons(value)
    if category is Category.ARRAY:
        return hash(("ndarray", value.shape, tuple(_hash(item) for item in value.flat)))
    if category is Category.HASH_TABLE:
        return hash(("table", len(value), frozenset(_hash(key) for key in value.keys())))
    if category in (Category.STRUCTURE, Category.INSTANCE):
        return object.__hash__(value)
    if category is Category.ANY:
        return _hash_generic(value)
    return hash(value)


def _hash_cons(cell: Cons) -> int:
    result = hash("cons")
    while isinstance(cell, Cons):
        result = hash((result, _hash(cell.car)))
        cell = cell.cdr
    return hash((result, _hash(cell)))


# Общий хеш для нехешируемых значений без собственного правила
_UNHASHABLE: int = hash("unhashable")


def _hash_generic(value: Any) -> int:
    if isinstance(value, list):
        return hash(("list", tuple(_hash(item) for item in value)))
    if isinstance(value, tuple):
        return hash(("tuple", tuple(_hash(item) for item in value)))
    if isinstance(value, (set, frozenset)):
        return hash(frozenset(value))
    if isinstance(value, bytearray):
        # bytearray == bytes с тем же содержимым
        return hash(bytes(value))
    try:
        return hash(value)
    except (TypeError, ValueError):
        # Не зависит от типа: равные значения разных нехешируемых типов совпадают
        return _UNHASHABLE
