"""
Domain models and value objects.

Значения, для которых протокол сравнения задаёт собственные правила:
Char, Cons, Symbol, HashTable, и категории диспетчеризации.
"""

from src.core.domain.category import Category, categorize
from src.core.domain.character import MAX_CODE_POINT, Char
from src.core.domain.cons import NIL, Cons, cons_to_list, is_proper_list
from src.core.domain.hash_table import (
    HashTable,
    KeyTest,
    TableProperties,
    Weakness,
    table_properties,
)
from src.core.domain.symbol import Symbol, gensym

__all__ = [
    # Categories
    "Category",
    "categorize",
    # Character
    "MAX_CODE_POINT",
    "Char",
    # Cons
    "NIL",
    "Cons",
    "cons_to_list",
    "is_proper_list",
    # Hash table
    "HashTable",
    "KeyTest",
    "TableProperties",
    "Weakness",
    "table_properties",
    # Symbol
    "Symbol",
    "gensym",
]
