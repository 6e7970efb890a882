"""
ComparisonOptions — конфигурация сравнения

Immutable Pydantic модель с именованными, типизированными полями и
значениями по умолчанию. Один экземпляр передаётся без изменений через
все рекурсивные вызовы equals/compare.

Поля:
- recursive: спускаться ли в структуру. Встроенные правила его игнорируют:
  cons-структуры и массивы сравниваются всегда глубоко.
- epsilon: толерантность для равенства чисел (None — точное равенство).
  Упорядочивание чисел epsilon не использует.
- case_sensitive: учёт регистра для символов и текста.
- by_key / by_value / check_properties: независимые проверки таблиц.
"""

from collections.abc import Mapping
from typing import Any, Final, Optional, Union

from pydantic import BaseModel, Field, StrictBool, ValidationError, field_validator

from src.core.math.numerical_safeguards import validate_tolerance


# =============================================================================
# EXCEPTIONS
# =============================================================================


class InvalidOptionError(ValueError):
    """Невалидное значение опции сравнения (например, отрицательный epsilon)."""


# =============================================================================
# OPTIONS MODEL
# =============================================================================


class ComparisonOptions(BaseModel):
    """
    Опции сравнения.

    Immutable модель (frozen=True): рекурсивные вызовы получают тот же
    экземпляр, изменения создают новый через make_options().
    """

    recursive: StrictBool = Field(True, description="Спуск в структуру")
    epsilon: Optional[Any] = Field(
        None, description="Толерантность равенства чисел (неотрицательное вещественное)"
    )
    case_sensitive: StrictBool = Field(True, description="Учёт регистра")
    by_key: StrictBool = Field(True, description="Таблицы: сравнивать ключи")
    by_value: StrictBool = Field(True, description="Таблицы: сравнивать значения")
    check_properties: StrictBool = Field(
        True, description="Таблицы: сравнивать структурные свойства"
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("epsilon")
    @classmethod
    def validate_epsilon(cls, v: Any) -> Any:
        """Толерантность: None или неотрицательное конечное вещественное."""
        return validate_tolerance(v, "epsilon")


# Экземпляр по умолчанию
DEFAULT_OPTIONS: Final[ComparisonOptions] = ComparisonOptions()


def make_options(
    options: Union[ComparisonOptions, Mapping[str, Any], None] = None, **overrides: Any
) -> ComparisonOptions:
    """
    Построение опций из базового экземпляра и именованных переопределений.

    Args:
        options: Базовые опции (default: DEFAULT_OPTIONS) или JSON-объект
            конфигурации, проверяемый контрактом comparison_options
        **overrides: Переопределения полей (recursive=False, epsilon=0.1, ...)

    Returns:
        ComparisonOptions (тот же экземпляр, если переопределений нет)

    Raises:
        InvalidOptionError: Если значение или имя опции невалидно

    Examples:
        >>> make_options(epsilon=0.5).epsilon
        0.5
        >>> make_options({"case_sensitive": False}).case_sensitive
        False
        >>> make_options() is DEFAULT_OPTIONS
        True
    """
    if options is None:
        base = DEFAULT_OPTIONS
    elif isinstance(options, ComparisonOptions):
        base = options
    elif isinstance(options, Mapping):
        # Контракты зависят от этого модуля
        from src.core.contracts.validators import options_from_config

        base = options_from_config(options)
    else:
        raise InvalidOptionError(
            f"options must be ComparisonOptions or a mapping, got {type(options).__name__}"
        )
    if not overrides:
        return base

    try:
        return ComparisonOptions(**{**dict(base), **overrides})
    except ValidationError as e:
        raise InvalidOptionError(str(e)) from e
