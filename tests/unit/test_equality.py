"""Тесты Equality Dispatcher (equals).

Coverage:
- Правила каждой категории
- Несовпадающие категории → общее правило
- Опции: epsilon, case_sensitive, by_key, by_value, check_properties
- Всегда-глубокое сравнение cons и массивов (recursive игнорируется)
- Записи (классы без собственного __eq__) сравниваются только по идентичности
"""

import copy
import dataclasses
import enum
from decimal import Decimal
from fractions import Fraction
from ipaddress import IPv4Address
from pathlib import PurePosixPath
from uuid import UUID

import numpy as np
import pytest

from src.core.contracts import ComparisonOptions, InvalidOptionError
from src.core.domain import Char, Cons, HashTable, KeyTest, Symbol, Weakness, gensym
from src.dispatch import equals, not_equals


@dataclasses.dataclass
class Point:
    x: int
    y: int


class Account:
    def __init__(self, owner):
        self.owner = owner


class Money:
    def __init__(self, amount):
        self.amount = amount

    def __eq__(self, other):
        return isinstance(other, Money) and self.amount == other.amount

    __hash__ = None


class Color(enum.Enum):
    RED = 1
    GREEN = 2


class TestNumbers:
    """NUMBER."""

    def test_exact_equality(self):
        """Без epsilon — точное равенство."""
        assert equals(1, 1)
        assert equals(1, 1.0)
        assert equals(Fraction(1, 2), 0.5)
        assert not equals(0.1 + 0.2, 0.3)

    def test_epsilon_tolerance(self):
        """С epsilon — abs(x - y) < epsilon."""
        assert equals(0.1 + 0.2, 0.3, epsilon=1e-9)
        assert equals(1.0, 1.05, epsilon=0.1)
        assert not equals(1.0, 1.2, epsilon=0.1)

    def test_epsilon_boundary_is_strict(self):
        """Разность ровно epsilon — не равны."""
        assert not equals(1, 2, epsilon=1)

    def test_zero_epsilon_keeps_exact_equality(self):
        """epsilon=0 не ломает равенство одинаковых чисел."""
        assert equals(7, 7, epsilon=0)

    def test_mixed_decimal(self):
        """Decimal сравнивается с int точно."""
        assert equals(Decimal("2"), 2)
        assert equals(Decimal("1.0"), 1.05, epsilon=0.1)

    def test_complex(self):
        """Комплексные числа: равенство и толерантность."""
        assert equals(1 + 2j, 1 + 2j)
        assert equals(1 + 2j, 1.01 + 2j, epsilon=0.1)
        assert not equals(1 + 2j, 1 - 2j)

    def test_nan_is_not_equal(self):
        """NaN не равен другому NaN: правило чисел — ==."""
        assert not equals(float("nan"), float("nan"))

    def test_invalid_epsilon(self):
        """Невалидный epsilon — InvalidOptionError."""
        with pytest.raises(InvalidOptionError):
            equals(1, 1, epsilon=-0.1)

        with pytest.raises(InvalidOptionError):
            equals(1, 1, epsilon="small")


class TestCharactersAndText:
    """CHARACTER и TEXT."""

    def test_chars_case_sensitive_by_default(self):
        """По умолчанию регистр учитывается."""
        assert equals(Char.of("a"), Char.of("a"))
        assert not equals(Char.of("A"), Char.of("a"))

    def test_chars_case_insensitive(self):
        """case_sensitive=False — сравнение по case-folding."""
        assert equals(Char.of("A"), Char.of("a"), case_sensitive=False)
        assert not equals(Char.of("A"), Char.of("b"), case_sensitive=False)

    def test_text_case_folding(self):
        """Строки: регистр по опции."""
        assert not equals("Abc", "abc")
        assert equals("Abc", "abc", case_sensitive=False)
        assert equals("STRASSE", "straße", case_sensitive=False)

    def test_char_and_text_are_different_categories(self):
        """Char и строка длины 1 не равны."""
        assert not equals(Char.of("a"), "a")


class TestCons:
    """CONS."""

    def test_equal_lists(self):
        """Равные цепочки равны."""
        assert equals(Cons.from_iterable([1, 2, 3]), Cons.from_iterable([1, 2, 3]))

    def test_different_length(self):
        """Разная длина — не равны."""
        assert not equals(Cons.from_iterable([1, 2]), Cons.from_iterable([1, 2, 3]))

    def test_dotted_tail(self):
        """Хвост точечного списка сравнивается."""
        assert equals(Cons(1, 2), Cons(1, 2))
        assert not equals(Cons(1, 2), Cons(1, 3))

    def test_trees(self):
        """Деревья сравниваются рекурсивно."""
        a = Cons(Cons("x", Cons.from_iterable([1.0])), Cons(Char.of("c"), None))
        b = Cons(Cons("x", Cons.from_iterable([1])), Cons(Char.of("c"), None))
        assert equals(a, b)

    def test_options_reach_leaves(self):
        """Опции передаются в рекурсивные вызовы."""
        a = Cons.from_iterable(["Abc", 1.0])
        b = Cons.from_iterable(["abc", 1.05])

        assert not equals(a, b)
        assert equals(a, b, case_sensitive=False, epsilon=0.1)

    def test_always_deep_regardless_of_recursive(self):
        """recursive=False игнорируется: cons сравниваются глубоко."""
        a = Cons.from_iterable([1, 2])
        b = Cons.from_iterable([1, 2])
        assert equals(a, b, recursive=False)

    def test_long_list_does_not_exhaust_stack(self):
        """Длинные цепочки обходятся циклом по cdr."""
        a = Cons.from_iterable(range(50_000))
        b = Cons.from_iterable(range(50_000))
        assert equals(a, b)


class TestArrays:
    """ARRAY."""

    def test_equal_arrays(self):
        """Одинаковая форма и элементы."""
        assert equals(np.arange(6).reshape(2, 3), np.arange(6).reshape(2, 3))

    def test_memory_order_is_irrelevant(self):
        """C- и Fortran-раскладка с одинаковыми значениями равны."""
        c = np.arange(6).reshape(2, 3)
        f = np.asfortranarray(c)
        assert not np.shares_memory(c, f)
        assert equals(c, f)

    def test_different_shape(self):
        """Разная форма — не равны, даже при тех же элементах."""
        assert not equals(np.arange(6).reshape(2, 3), np.arange(6).reshape(3, 2))
        assert not equals(np.arange(6), np.arange(6).reshape(1, 6))

    def test_element_rules_apply(self):
        """Элементы сравниваются протоколом с теми же опциями."""
        a = np.array([1.0, 2.0])
        b = np.array([1.05, 2.0])
        assert not equals(a, b)
        assert equals(a, b, epsilon=0.1)

    def test_object_arrays(self):
        """Объектные массивы: cons внутри сравниваются рекурсивно."""
        a = np.empty(2, dtype=object)
        b = np.empty(2, dtype=object)
        a[0], a[1] = Cons(1, 2), "Text"
        b[0], b[1] = Cons(1, 2), "text"

        assert equals(a, b, case_sensitive=False)
        assert not equals(a, b)

    def test_array_and_list_are_not_equal(self):
        """Массив и list — разные категории."""
        assert not equals(np.array([1, 2]), [1, 2])

    def test_zero_rank(self):
        """Массивы ранга 0."""
        assert equals(np.array(5), np.array(5.0))


class TestRecords:
    """STRUCTURE и INSTANCE."""

    def test_structure_identity_only(self):
        """Dataclass сравнивается только по идентичности."""
        p = Point(1, 2)
        assert equals(p, p)
        assert not equals(p, Point(1, 2))
        assert not equals(p, copy.copy(p))

    def test_instance_identity_only(self):
        """Экземпляры классов — только идентичность."""
        a = Account("alice")
        assert equals(a, a)
        assert not equals(a, copy.deepcopy(a))

    def test_classes_with_own_eq_are_values(self):
        """Класс с собственным __eq__ — значение, а не запись."""
        assert equals(Money(5), Money(5))
        assert not equals(Money(5), Money(6))


class TestHashTables:
    """HASH_TABLE."""

    def test_identity(self):
        """Та же таблица равна себе."""
        t = HashTable({"a": 1})
        assert equals(t, t)

    def test_same_entries_same_properties(self):
        """Одинаковые записи и свойства."""
        assert equals(HashTable({"a": 1, "b": 2}), HashTable({"b": 2, "a": 1}))

    def test_different_counts(self):
        """Разное число записей."""
        assert not equals(HashTable({"a": 1}), HashTable({"a": 1, "b": 2}))

    def test_different_capacity(self):
        """Разная ёмкость: равны только без check_properties."""
        a = HashTable({"a": 1}, size=16)
        b = HashTable({"a": 1}, size=64)

        assert not equals(a, b)
        assert not equals(a, b, check_properties=True)
        assert equals(a, b, check_properties=False)

    @pytest.mark.parametrize(
        "override",
        [
            {"rehash_size": 2.0},
            {"rehash_threshold": 0.5},
            {"test": KeyTest.EQL},
            {"weakness": Weakness.KEY},
            {"synchronized": True},
        ],
    )
    def test_each_property_is_checked(self, override):
        """Каждое структурное свойство участвует в сравнении."""
        a = HashTable({1: "x"})
        b = HashTable({1: "x"}, **override)

        assert not equals(a, b)
        assert equals(a, b, check_properties=False)

    def test_by_key(self):
        """Разные ключи с одинаковыми значениями."""
        a = HashTable({"a": 1})
        b = HashTable({"b": 1})

        assert not equals(a, b)
        assert equals(a, b, by_key=False)

    def test_by_value(self):
        """Одинаковые ключи с разными значениями."""
        a = HashTable({"a": 1})
        b = HashTable({"a": 2})

        assert not equals(a, b)
        assert equals(a, b, by_value=False)

    def test_values_are_a_multiset(self):
        """Значения сравниваются как мультимножество."""
        a = HashTable({"a": 1, "b": 1, "c": 2})
        b = HashTable({"a": 1, "b": 2, "c": 2})
        assert not equals(a, b)

    def test_value_matching_is_not_greedy(self):
        """С epsilon пары значений подбираются целиком, а не первым совпадением."""
        a = {"a": 1.0, "b": 2.2}
        b = {"a": 1.5, "b": 0.5}

        # 1.0 ~ 0.5 и 2.2 ~ 1.5, хотя 1.0 ~ 1.5 тоже
        assert equals(a, b, epsilon=1, by_key=False)
        assert equals(b, a, epsilon=1, by_key=False)
        assert not equals(a, {"a": 0.5, "b": 0.6}, epsilon=1, by_key=False)

    def test_value_matching_longer_chain(self):
        """Увеличивающий путь через несколько уже сопоставленных значений."""
        a = HashTable({1: 1.0, 2: 2.0, 3: 3.0})
        b = HashTable({1: 1.6, 2: 2.6, 3: 0.6})
        assert equals(a, b, epsilon=0.7, by_key=False)
        assert not equals(a, b, epsilon=0.3, by_key=False)

    def test_keys_and_values_use_protocol(self):
        """Ключи и значения сравниваются протоколом с опциями."""
        a = HashTable({"Key": 1.0})
        b = HashTable({"key": 1.05})

        assert not equals(a, b)
        assert equals(a, b, case_sensitive=False, epsilon=0.1)

    def test_plain_dicts(self):
        """dict — тоже таблица; свойств у него нет."""
        assert equals({"a": [1, 2]}, {"a": [1, 2]})
        assert not equals({"a": 1}, {"a": 2})

    def test_dict_vs_hash_table_properties(self):
        """dict и HashTable различаются свойствами."""
        assert not equals({"a": 1}, HashTable({"a": 1}))
        assert equals({"a": 1}, HashTable({"a": 1}), check_properties=False)

    def test_all_checks_disabled(self):
        """Без проверок остаётся только число записей."""
        a = HashTable({"a": 1}, size=8)
        b = HashTable({"b": 2}, size=99)
        assert equals(a, b, by_key=False, by_value=False, check_properties=False)


class TestSymbols:
    """SYMBOL."""

    def test_identity(self):
        """Символы равны только себе."""
        assert equals(Symbol("a"), Symbol("a"))
        assert not equals(Symbol("a"), Symbol("b"))
        assert not equals(gensym("x"), gensym("x"))

    def test_tokens(self):
        """None, bool и Enum — токены."""
        assert equals(None, None)
        assert equals(Color.RED, Color.RED)
        assert not equals(Color.RED, Color.GREEN)

    def test_tokens_never_equal_other_categories(self):
        """True не равен 1, None не равен пустому списку."""
        assert not equals(True, 1)
        assert not equals(1, True)
        assert not equals(None, [])


class TestGeneric:
    """Общее правило и несовпадающие категории."""

    def test_mismatched_categories(self):
        """Разные категории — не равны."""
        assert not equals("a", 3)
        assert not equals(Char.of("3"), 3)
        assert not equals(Cons(1, None), [1])

    def test_lists_and_tuples(self):
        """Значение + форма."""
        assert equals([1, [2, 3]], [1, [2, 3]])
        assert not equals([1, 2], [1, 2, 3])
        assert not equals([1, 2], (1, 2))
        assert equals((1, "a"), (1, "a"))

    def test_generic_ignores_options(self):
        """Общее правило не настраивается опциями."""
        assert not equals(["Abc"], ["abc"], case_sensitive=False)
        assert not equals([1.0], [1.05], epsilon=0.1)

    def test_generic_descends_into_protocol_values(self):
        """Списки с cons и массивами сравниваются корректно."""
        assert equals([Cons(1, 2)], [Cons(1, 2)])
        assert equals([np.array([1, 2])], [np.array([1, 2])])

    def test_sets_and_bytes(self):
        """set и bytes — по значению."""
        assert equals({1, 2}, {2, 1})
        assert equals(b"ab", b"ab")
        assert not equals(b"ab", b"ba")
        assert equals(b"ab", bytearray(b"ab"))

    def test_host_value_types(self):
        """Path, UUID, IPv4Address сравниваются по значению, а не по идентичности."""
        uuid = "12345678-1234-5678-1234-567812345678"

        assert equals(PurePosixPath("a/b"), PurePosixPath("a/b"))
        assert equals(UUID(uuid), UUID(uuid))
        assert equals(IPv4Address("10.0.0.1"), IPv4Address("10.0.0.1"))
        assert not equals(IPv4Address("10.0.0.1"), IPv4Address("10.0.0.2"))


class TestNotEquals:
    """not_equals."""

    def test_negation(self):
        """not_equals — отрицание equals с теми же опциями."""
        assert not_equals(1, 2)
        assert not not_equals("A", "a", case_sensitive=False)

    def test_explicit_options_object(self):
        """Можно передать готовый ComparisonOptions."""
        opts = ComparisonOptions(epsilon=0.5)
        assert not not_equals(1.0, 1.2, options=opts)

    def test_options_mapping(self):
        """Опции можно передать JSON-объектом конфигурации."""
        assert not not_equals(1.0, 1.2, options={"epsilon": 0.5})

        with pytest.raises(InvalidOptionError):
            equals(1.0, 1.2, options={"epsilon": -0.5})
