"""
Cons — пара (car, cdr) и списки на её основе

Cons-ячейка — единица связных структур: цепочка ячеек, оканчивающаяся
NIL (None), образует правильный список; любое другое значение в cdr
последней ячейки даёт «точечный» список. car и cdr могут содержать
другие ячейки, образуя деревья.

ОГРАНИЧЕНИЕ: циклические структуры допустимы при построении, но
сравнение и хеширование их не завершаются (детекции циклов нет).
"""

from typing import Any, Iterable, Iterator, List, Optional

# Пустой список
NIL = None


class Cons:
    """Изменяемая пара (car, cdr)."""

    __slots__ = ("car", "cdr")

    def __init__(self, car: Any, cdr: Any = NIL):
        self.car = car
        self.cdr = cdr

    @classmethod
    def from_iterable(cls, items: Iterable[Any], tail: Any = NIL) -> Optional["Cons"]:
        """
        Построение списка из итерируемого.

        Args:
            items: Элементы списка
            tail: cdr последней ячейки (NIL для правильного списка)

        Returns:
            Первая ячейка или tail, если items пуст

        Examples:
            >>> cons_to_list(Cons.from_iterable([1, 2, 3]))
            [1, 2, 3]
        """
        result = tail
        for item in reversed(list(items)):
            result = cls(item, result)
        return result

    def __iter__(self) -> Iterator[Any]:
        """Итерация по car ячеек цепочки (хвост точечного списка не выдаётся)."""
        cell = self
        while isinstance(cell, Cons):
            yield cell.car
            cell = cell.cdr

    def __repr__(self):
        parts = []
        cell = self
        while isinstance(cell, Cons):
            parts.append(repr(cell.car))
            cell = cell.cdr
        if cell is not NIL:
            parts.append(".")
            parts.append(repr(cell))
        return "(" + " ".join(parts) + ")"


def cons_to_list(cell: Any) -> List[Any]:
    """
    Элементы правильного или точечного списка в виде list.

    Хвост точечного списка отбрасывается.
    """
    if not isinstance(cell, Cons):
        return []
    return list(cell)


def is_proper_list(cell: Any) -> bool:
    """Оканчивается ли цепочка ячеек NIL."""
    while isinstance(cell, Cons):
        cell = cell.cdr
    return cell is NIL
