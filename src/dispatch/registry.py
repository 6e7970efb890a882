"""Dispatch Registry — реестр пользовательских правил сравнения.

Правила равенства и порядка регистрируются для пар типов операндов,
правила хеширования — для одного типа. Разрешение идёт по MRO обоих
операндов: побеждает правило с наименьшей суммарной дистанцией по MRO,
при равенстве — с меньшей дистанцией левого операнда.

Жизненный цикл реестра:
- OPEN: регистрация разрешена (фаза инициализации)
- SEALED: регистрация запрещена, реестр только читается

Переход OPEN → SEALED односторонний. Регистрация во время активных
сравнений в других потоках не поддерживается: все регистрации нужно
завершить до конкурентного использования, затем вызвать seal().
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

logger = logging.getLogger(__name__)

# rule(x, y, options) -> bool | Ordering
PairRule = Callable[[Any, Any, Any], Any]
# rule(value) -> int
HashRule = Callable[[Any], int]


class RegistryState(str, Enum):
    """Состояние реестра."""

    OPEN = "OPEN"
    SEALED = "SEALED"


class RegistrySealedError(RuntimeError):
    """Попытка регистрации в запечатанном реестре."""


class DispatchRegistry:
    """Реестр правил equals / compare / hash_code для пользовательских типов.

    Examples:
        >>> registry = DispatchRegistry("geometry")
        >>> @registry.register_equality(Point)
        ... def points_equal(a, b, options):
        ...     return a.x == b.x and a.y == b.y
        >>> registry.seal()
    """

    def __init__(self, name: str = "default"):
        """
        Args:
            name: имя реестра (для логов и repr)
        """
        self.name = name
        self._state = RegistryState.OPEN

        self._equality: Dict[Tuple[type, type], PairRule] = {}
        self._ordering: Dict[Tuple[type, type], PairRule] = {}
        self._hash: Dict[type, HashRule] = {}

        # Кэш разрешения, сбрасывается при каждой регистрации
        self._cache: Dict[Tuple[str, type, type], Optional[Callable]] = {}

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def state(self) -> RegistryState:
        return self._state

    @property
    def is_sealed(self) -> bool:
        return self._state == RegistryState.SEALED

    def seal(self) -> None:
        """Запечатать реестр. Повторный вызов ничего не делает."""
        if self._state == RegistryState.SEALED:
            return
        self._state = RegistryState.SEALED
        logger.debug(
            "registry %s sealed: %d equality, %d ordering, %d hash rules",
            self.name,
            len(self._equality),
            len(self._ordering),
            len(self._hash),
        )

    def _check_open(self) -> None:
        if self._state == RegistryState.SEALED:
            raise RegistrySealedError(f"registry {self.name!r} is sealed")

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register_equality(
        self,
        left: type,
        right: Optional[type] = None,
        *,
        symmetric: bool = True,
    ) -> Callable[[PairRule], PairRule]:
        """Декоратор правила равенства для пары типов.

        Args:
            left: тип левого операнда
            right: тип правого операнда (default: left)
            symmetric: также зарегистрировать пару (right, left)
                с переставленными аргументами

        Returns:
            декоратор, возвращающий правило без изменений
        """
        right = left if right is None else right

        def decorator(rule: PairRule) -> PairRule:
            self._check_open()
            self._add(self._equality, (left, right), rule, "equality")
            if symmetric and left is not right:
                self._add(
                    self._equality,
                    (right, left),
                    lambda y, x, options: rule(x, y, options),
                    "equality",
                )
            return rule

        return decorator

    def register_ordering(
        self,
        left: type,
        right: Optional[type] = None,
        *,
        symmetric: bool = True,
    ) -> Callable[[PairRule], PairRule]:
        """Декоратор правила порядка для пары типов.

        Правило возвращает Ordering. Для переставленной пары результат
        разворачивается (LESS ↔ GREATER).
        """
        right = left if right is None else right

        def decorator(rule: PairRule) -> PairRule:
            self._check_open()
            self._add(self._ordering, (left, right), rule, "ordering")
            if symmetric and left is not right:
                self._add(
                    self._ordering,
                    (right, left),
                    lambda y, x, options: rule(x, y, options).reverse(),
                    "ordering",
                )
            return rule

        return decorator

    def register_hash(self, cls: type) -> Callable[[HashRule], HashRule]:
        """Декоратор правила хеширования для типа.

        Правило обязано давать равные хеши значениям, равным по equals
        с опциями по умолчанию.
        """

        def decorator(rule: HashRule) -> HashRule:
            self._check_open()
            self._hash[cls] = rule
            self._cache.clear()
            logger.debug("registry %s: hash rule for %s", self.name, cls.__qualname__)
            return rule

        return decorator

    def _add(self, table: Dict, key: Tuple[type, type], rule: PairRule, kind: str) -> None:
        if key in table:
            logger.debug(
                "registry %s: replacing %s rule for (%s, %s)",
                self.name,
                kind,
                key[0].__qualname__,
                key[1].__qualname__,
            )
        table[key] = rule
        self._cache.clear()
        logger.debug(
            "registry %s: %s rule for (%s, %s)",
            self.name,
            kind,
            key[0].__qualname__,
            key[1].__qualname__,
        )

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def resolve_equality(self, left: type, right: type) -> Optional[PairRule]:
        """Наиболее специфичное правило равенства или None."""
        return self._resolve_pair("equality", self._equality, left, right)

    def resolve_ordering(self, left: type, right: type) -> Optional[PairRule]:
        """Наиболее специфичное правило порядка или None."""
        return self._resolve_pair("ordering", self._ordering, left, right)

    def resolve_hash(self, cls: type) -> Optional[HashRule]:
        """Правило хеширования ближайшего по MRO типа или None."""
        if not self._hash:
            return None
        key = ("hash", cls, cls)
        if key in self._cache:
            return self._cache[key]

        rule = None
        for base in cls.__mro__:
            if base in self._hash:
                rule = self._hash[base]
                break
        self._cache[key] = rule
        return rule

    def _resolve_pair(
        self, kind: str, table: Dict, left: type, right: type
    ) -> Optional[PairRule]:
        if not table:
            return None
        key = (kind, left, right)
        if key in self._cache:
            return self._cache[key]

        best = None
        best_rank = None
        for i, left_base in enumerate(left.__mro__):
            for j, right_base in enumerate(right.__mro__):
                rule = table.get((left_base, right_base))
                if rule is None:
                    continue
                rank = (i + j, i)
                if best_rank is None or rank < best_rank:
                    best, best_rank = rule, rank

        self._cache[key] = best
        return best

    def __repr__(self):
        return f"DispatchRegistry({self.name!r}, state={self._state.value})"


# =============================================================================
# DEFAULT / ACTIVE REGISTRY
# =============================================================================

DEFAULT_REGISTRY = DispatchRegistry("default")

_ACTIVE_REGISTRY: ContextVar[DispatchRegistry] = ContextVar(
    "active_dispatch_registry", default=DEFAULT_REGISTRY
)


def current_registry() -> DispatchRegistry:
    """Реестр, действующий в текущем контексте (рекурсивные вызовы видят его же)."""
    return _ACTIVE_REGISTRY.get()


@contextmanager
def using_registry(registry: Optional[DispatchRegistry]) -> Iterator[DispatchRegistry]:
    """Сделать registry активным на время блока."""
    if registry is None or registry is _ACTIVE_REGISTRY.get():
        yield _ACTIVE_REGISTRY.get()
        return
    token = _ACTIVE_REGISTRY.set(registry)
    try:
        yield registry
    finally:
        _ACTIVE_REGISTRY.reset(token)


def register_equality(left: type, right: Optional[type] = None, *, symmetric: bool = True):
    """register_equality для DEFAULT_REGISTRY."""
    return DEFAULT_REGISTRY.register_equality(left, right, symmetric=symmetric)


def register_ordering(left: type, right: Optional[type] = None, *, symmetric: bool = True):
    """register_ordering для DEFAULT_REGISTRY."""
    return DEFAULT_REGISTRY.register_ordering(left, right, symmetric=symmetric)


def register_hash(cls: type):
    """register_hash для DEFAULT_REGISTRY."""
    return DEFAULT_REGISTRY.register_hash(cls)


def seal_registry() -> None:
    """Запечатать DEFAULT_REGISTRY после фазы инициализации."""
    DEFAULT_REGISTRY.seal()
