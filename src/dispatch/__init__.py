"""Dispatch — протокол структурного равенства и порядка.

Точки входа:
- equals / not_equals: равенство по категориям операндов
- compare: четырёхзначный порядок (Ordering)
- strict_less / less_or_equal / strict_greater / greater_or_equal:
  предикаты поверх compare, UNORDERED → UnorderableOperandsError
- minimum / maximum: крайние значения по compare
- hash_code: хеш, согласованный с equals
- DispatchRegistry: расширение правил для пользовательских типов
"""

from .equality import dispatch_equal, equals, not_equals
from .hashing import hash_code
from .ordering import Ordering, compare, dispatch_compare
from .registry import (
    DEFAULT_REGISTRY,
    DispatchRegistry,
    RegistrySealedError,
    RegistryState,
    current_registry,
    register_equality,
    register_hash,
    register_ordering,
    seal_registry,
    using_registry,
)
from .relational import (
    UnorderableOperandsError,
    greater_or_equal,
    less_or_equal,
    maximum,
    minimum,
    strict_greater,
    strict_less,
)

__all__ = [
    # Equality
    "equals",
    "not_equals",
    "dispatch_equal",
    # Ordering
    "Ordering",
    "compare",
    "dispatch_compare",
    # Relational
    "UnorderableOperandsError",
    "strict_less",
    "less_or_equal",
    "strict_greater",
    "greater_or_equal",
    "minimum",
    "maximum",
    # Hash
    "hash_code",
    # Registry
    "DEFAULT_REGISTRY",
    "DispatchRegistry",
    "RegistrySealedError",
    "RegistryState",
    "current_registry",
    "register_equality",
    "register_hash",
    "register_ordering",
    "seal_registry",
    "using_registry",
]
