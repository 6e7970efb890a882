"""
Symbol — атомарный интернированный токен

Два символа с одинаковым именем и пакетом — один и тот же объект,
поэтому сравнение символов сводится к идентичности.
"""

import itertools
import threading
from typing import Dict, Optional, Tuple


class Symbol:
    """
    Интернированный символ.

    Symbol("foo") is Symbol("foo") — всегда True.
    Неинтернированные символы создаются через gensym().
    """

    __slots__ = ("name", "package", "__weakref__")

    _table: Dict[Tuple[Optional[str], str], "Symbol"] = {}
    _lock = threading.Lock()

    def __new__(cls, name: str, package: Optional[str] = None):
        if not isinstance(name, str):
            raise ValueError(f"symbol name must be a string, got {name!r}")
        key = (package, name)
        with cls._lock:
            symbol = cls._table.get(key)
            if symbol is None:
                symbol = cls._make(name, package)
                cls._table[key] = symbol
        return symbol

    @classmethod
    def _make(cls, name: str, package: Optional[str]) -> "Symbol":
        symbol = object.__new__(cls)
        symbol.name = name
        symbol.package = package
        return symbol

    def __reduce__(self):
        return (Symbol, (self.name, self.package))

    def __repr__(self):
        if self.package is None:
            return self.name
        return f"{self.package}:{self.name}"


_gensym_counter = itertools.count()


def gensym(prefix: str = "G") -> Symbol:
    """Неинтернированный символ: никогда не идентичен другому символу."""
    return Symbol._make(f"{prefix}{next(_gensym_counter)}", None)
