"""
Category — закрытый набор категорий диспетчеризации

Каждое значение относится ровно к одной категории. Правило сравнения
выбирается по паре категорий операндов; несовпадающие категории
получают общее правило ANY.
"""

import dataclasses
import types
from collections.abc import Mapping
from enum import Enum

import numpy as np

from src.core.domain.character import Char
from src.core.domain.cons import Cons
from src.core.domain.symbol import Symbol
from src.core.math.numerical_safeguards import is_number

# Объекты с __dict__, которые не являются записями
_NON_RECORD_TYPES = (
    type,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
)


class Category(str, Enum):
    """Категория значения."""

    ANY = "any"
    NUMBER = "number"
    CHARACTER = "character"
    TEXT = "text"
    CONS = "cons"
    ARRAY = "array"
    STRUCTURE = "structure"  # запись с фиксированной раскладкой
    INSTANCE = "instance"  # запись с открытой раскладкой
    HASH_TABLE = "hash-table"
    SYMBOL = "symbol"


def _is_token(value: object) -> bool:
    return value is None or isinstance(value, (bool, Symbol, Enum))


def _has_value_equality(value: object) -> bool:
    # Класс задаёт собственное __eq__: это значение хоста (Path, UUID, ...),
    # а не запись. Dataclass-записи сравниваются по идентичности и сюда не попадают.
    return type(value).__eq__ is not object.__eq__


def _is_structure(value: object) -> bool:
    cls = type(value)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return True
    if _has_value_equality(value):
        return False
    # __slots__ без __dict__: раскладка фиксирована
    return hasattr(cls, "__slots__") and not hasattr(value, "__dict__")


def _is_instance(value: object) -> bool:
    # Экземпляры пользовательских классов: есть собственный __dict__
    return (
        hasattr(value, "__dict__")
        and not isinstance(value, _NON_RECORD_TYPES)
        and not _has_value_equality(value)
    )


def categorize(value: object) -> Category:
    """
    Категория значения.

    Порядок проверок важен: bool — токен, а не число; Char и Symbol
    используют __slots__, но имеют собственные категории.

    Examples:
        >>> categorize(3)
        <Category.NUMBER: 'number'>
        >>> categorize(True)
        <Category.SYMBOL: 'symbol'>
        >>> categorize([1, 2])
        <Category.ANY: 'any'>
    """
    if _is_token(value):
        return Category.SYMBOL
    if is_number(value):
        return Category.NUMBER
    if isinstance(value, Char):
        return Category.CHARACTER
    if isinstance(value, str):
        return Category.TEXT
    if isinstance(value, Cons):
        return Category.CONS
    if isinstance(value, np.ndarray):
        return Category.ARRAY
    if isinstance(value, Mapping):
        return Category.HASH_TABLE
    if isinstance(value, (list, tuple, set, frozenset, bytes, bytearray, range)):
        return Category.ANY
    if _is_structure(value):
        return Category.STRUCTURE
    if _is_instance(value):
        return Category.INSTANCE
    return Category.ANY
