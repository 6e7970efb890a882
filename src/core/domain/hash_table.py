"""
HashTable — ассоциативная таблица со структурными свойствами

В отличие от dict, таблица хранит и отдаёт свои структурные свойства:
- size: текущая ёмкость
- rehash_size: множитель роста ёмкости
- rehash_threshold: доля заполнения, после которой ёмкость растёт
- test: политика равенства ключей (EQ / EQL / EQUAL / EQUALP)
- weakness: режим слабых ссылок (фиксируется как свойство, записи хранятся сильно)
- synchronized: операции под блокировкой

Эти свойства участвуют в проверке равенства таблиц (check_properties).
"""

import math
import threading
from collections.abc import Mapping, MutableMapping
from contextlib import nullcontext
from enum import Enum
from typing import Any, Iterator, Optional

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class KeyTest(str, Enum):
    """Политика равенства ключей."""

    EQ = "eq"  # идентичность
    EQL = "eql"  # идентичность; числа одного типа и символы по значению
    EQUAL = "equal"  # структурное равенство (протокол equals)
    EQUALP = "equalp"  # структурное равенство без учёта регистра


class Weakness(str, Enum):
    """Режим слабых ссылок."""

    NONE = "none"
    KEY = "key"
    VALUE = "value"
    KEY_AND_VALUE = "key-and-value"
    KEY_OR_VALUE = "key-or-value"


# =============================================================================
# PROPERTIES
# =============================================================================


class TableProperties(BaseModel):
    """Структурные свойства таблицы."""

    size: int = Field(16, ge=0, description="Ёмкость таблицы")
    rehash_size: float = Field(1.5, gt=1.0, description="Множитель роста ёмкости")
    rehash_threshold: float = Field(
        0.75, gt=0, le=1, description="Доля заполнения, запускающая рост"
    )
    test: KeyTest = Field(KeyTest.EQUAL, description="Политика равенства ключей")
    weakness: Weakness = Field(Weakness.NONE, description="Режим слабых ссылок")
    synchronized: bool = Field(False, description="Операции под блокировкой")

    model_config = {"frozen": True}  # Immutable


# =============================================================================
# KEYS
# =============================================================================


class _TableKey:
    """Обёртка ключа, реализующая политику KeyTest поверх dict."""

    __slots__ = ("key", "test", "_hash")

    def __init__(self, key: Any, test: KeyTest):
        self.key = key
        self.test = test
        self._hash = _key_hash(key, test)

    def __hash__(self):
        return self._hash

    def __eq__(self, other):
        if not isinstance(other, _TableKey):
            return NotImplemented
        return _keys_equal(self.key, other.key, self.test)


def _is_eql_atom(key: Any) -> bool:
    from src.core.domain.character import Char
    from src.core.math.numerical_safeguards import is_number

    return is_number(key) or isinstance(key, Char)


def _key_hash(key: Any, test: KeyTest) -> int:
    # Протокол сравнения импортируется лениво: он сам зависит от domain
    from src.dispatch.hashing import hash_code

    if test is KeyTest.EQ:
        return id(key)
    if test is KeyTest.EQL:
        if _is_eql_atom(key):
            return hash((type(key), key))
        return id(key)
    if test is KeyTest.EQUALP:
        return _folded_hash(key)
    return hash_code(key)


# EQUALP-ключи, равенство которых решает протокол, а не host hash
_COMPOSITE_KEY_HASH: int = hash("composite-key")


def _folded_hash(key: Any) -> int:
    from src.core.domain.character import Char
    from src.core.math.numerical_safeguards import is_number

    if isinstance(key, str):
        return hash(key.casefold())
    if isinstance(key, Char):
        return hash(key.folded())
    if is_number(key):
        return hash(key)
    # Составные ключи: общий хеш, не зависящий ни от регистра, ни от типа
    return _COMPOSITE_KEY_HASH


def _keys_equal(a: Any, b: Any, test: KeyTest) -> bool:
    from src.dispatch.equality import equals

    if a is b:
        return True
    if test is KeyTest.EQ:
        return False
    if test is KeyTest.EQL:
        return type(a) is type(b) and _is_eql_atom(a) and a == b
    if test is KeyTest.EQUALP:
        return equals(a, b, case_sensitive=False)
    return equals(a, b)


# =============================================================================
# HASH TABLE
# =============================================================================


class HashTable(MutableMapping):
    """
    Ассоциативная таблица с политикой ключей и структурными свойствами.

    Ёмкость растёт в rehash_size раз, когда число записей превышает
    size * rehash_threshold.

    Examples:
        >>> table = HashTable({"a": 1}, size=32)
        >>> table.properties.size
        32
        >>> table["a"]
        1
    """

    def __init__(
        self,
        entries: Optional[Any] = None,
        *,
        size: int = 16,
        rehash_size: float = 1.5,
        rehash_threshold: float = 0.75,
        test: KeyTest = KeyTest.EQUAL,
        weakness: Weakness = Weakness.NONE,
        synchronized: bool = False,
    ):
        """
        Args:
            entries: Начальные записи (Mapping или итерируемое пар)
            size: Начальная ёмкость
            rehash_size: Множитель роста ёмкости (> 1)
            rehash_threshold: Порог заполнения (0, 1]
            test: Политика равенства ключей
            weakness: Режим слабых ссылок
            synchronized: Выполнять операции под блокировкой

        Raises:
            pydantic.ValidationError: Если свойства невалидны
        """
        self._properties = TableProperties(
            size=size,
            rehash_size=rehash_size,
            rehash_threshold=rehash_threshold,
            test=test,
            weakness=weakness,
            synchronized=synchronized,
        )
        self._entries: dict = {}
        self._lock = threading.RLock() if synchronized else nullcontext()

        if entries is not None:
            items = entries.items() if isinstance(entries, Mapping) else entries
            for key, value in items:
                self[key] = value

    @property
    def properties(self) -> TableProperties:
        """Текущие структурные свойства (снапшот)."""
        return self._properties

    @property
    def test(self) -> KeyTest:
        return self._properties.test

    def _wrap(self, key: Any) -> _TableKey:
        return _TableKey(key, self._properties.test)

    def _grow_if_needed(self) -> None:
        props = self._properties
        size = props.size
        while len(self._entries) > size * props.rehash_threshold:
            size = max(size + 1, math.ceil(size * props.rehash_size))
        if size != props.size:
            self._properties = props.model_copy(update={"size": size})

    def __getitem__(self, key: Any) -> Any:
        with self._lock:
            return self._entries[self._wrap(key)][1]

    def __setitem__(self, key: Any, value: Any) -> None:
        with self._lock:
            wrapped = self._wrap(key)
            existing = self._entries.get(wrapped)
            # Сохраняем исходный ключ при перезаписи
            stored_key = existing[0] if existing is not None else key
            self._entries[wrapped] = (stored_key, value)
            self._grow_if_needed()

    def __delitem__(self, key: Any) -> None:
        with self._lock:
            del self._entries[self._wrap(key)]

    def __iter__(self) -> Iterator[Any]:
        with self._lock:
            keys = [key for key, _ in self._entries.values()]
        return iter(keys)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            return self._wrap(key) in self._entries

    def copy(self) -> "HashTable":
        """Копия с теми же записями и свойствами."""
        props = self._properties
        result = HashTable(
            size=props.size,
            rehash_size=props.rehash_size,
            rehash_threshold=props.rehash_threshold,
            test=props.test,
            weakness=props.weakness,
            synchronized=props.synchronized,
        )
        with self._lock:
            result._entries = dict(self._entries)
        return result

    # Таблицы сравниваются только через протокол; == остаётся идентичностью
    __eq__ = object.__eq__
    __hash__ = object.__hash__

    def __repr__(self):
        items = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"HashTable({{{items}}}, test={self._properties.test.value})"


def table_properties(table: Any) -> Optional[TableProperties]:
    """Свойства таблицы или None, если хост их не предоставляет (dict и др.)."""
    if isinstance(table, HashTable):
        return table.properties
    return None
