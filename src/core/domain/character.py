"""
Char — Модель символа (одна кодовая точка Unicode)

В Python нет отдельного типа для символа: строка длины 1 остаётся строкой.
Char делает категорию CHARACTER явной, чтобы равенство и порядок
символов выбирались отдельно от правил для текста.
"""

from functools import total_ordering
from typing import Final

# Максимальная кодовая точка Unicode
MAX_CODE_POINT: Final[int] = 0x10FFFF


@total_ordering
class Char:
    """
    Неизменяемый символ.

    Сравнение операторами Python (==, <) всегда регистрозависимое и идёт
    по кодовой точке. Регистронезависимое сравнение доступно только через
    протокол сравнения (case_sensitive=False).
    """

    __slots__ = ("_code",)

    def __init__(self, code: int):
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError(f"code must be an int code point, got {code!r}")
        if not 0 <= code <= MAX_CODE_POINT:
            raise ValueError(f"code point out of range: {code:#x}")
        object.__setattr__(self, "_code", code)

    @classmethod
    def of(cls, text: str) -> "Char":
        """
        Символ из строки длины 1.

        Raises:
            ValueError: Если длина строки не равна 1
        """
        if not isinstance(text, str) or len(text) != 1:
            raise ValueError(f"expected a single-character string, got {text!r}")
        return cls(ord(text))

    @property
    def code(self) -> int:
        """Кодовая точка."""
        return self._code

    def folded(self) -> str:
        """Case-folded представление (может быть длиннее одного символа: 'ß' → 'ss')."""
        return chr(self._code).casefold()

    def __setattr__(self, name, value):
        raise AttributeError("Char is immutable")

    def __reduce__(self):
        return (Char, (self._code,))

    def __eq__(self, other):
        if isinstance(other, Char):
            return self._code == other._code
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, Char):
            return self._code < other._code
        return NotImplemented

    def __hash__(self):
        return hash(("Char", self._code))

    def __str__(self):
        return chr(self._code)

    def __repr__(self):
        return f"Char({chr(self._code)!r})"
