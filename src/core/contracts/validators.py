"""
Configuration Contracts — опции сравнения и свойства таблиц из JSON

Конфигурация, пришедшая извне (файл настроек, декодированный JSON),
сначала проверяется JSON Schema контрактом, затем превращается в модель.
Контракт отвечает за форму документа (имена полей, типы, диапазоны),
pydantic-модель за остальное.

Контракты (src/core/contracts/schema/):
- comparison_options.json: опции equals/compare
- table_properties.json: структурные свойства HashTable

Любое нарушение приводит к InvalidOptionError с префиксом контракта.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match
from pydantic import ValidationError

from src.core.contracts.options import ComparisonOptions, InvalidOptionError
from src.core.domain.hash_table import HashTable

_SCHEMA_DIR = Path(__file__).parent / "schema"

COMPARISON_OPTIONS: str = "comparison_options"
TABLE_PROPERTIES: str = "table_properties"


# =============================================================================
# CONTRACTS
# =============================================================================


@lru_cache(maxsize=None)
def contract_validator(name: str) -> Draft202012Validator:
    """
    Валидатор контракта по имени (загружается один раз).

    Raises:
        FileNotFoundError: Если контракта нет
        jsonschema.SchemaError: Если сам контракт невалиден
    """
    with open(_SCHEMA_DIR / f"{name}.json", "r", encoding="utf-8") as f:
        schema = json.load(f)
    Draft202012Validator.check_schema(schema)
    return Draft202012Validator(schema)


def check_contract(name: str, data: Any) -> Dict[str, Any]:
    """
    Проверка документа контрактом.

    Returns:
        data как dict (для передачи в модель)

    Raises:
        InvalidOptionError: Наиболее релевантное нарушение контракта
    """
    error = best_match(contract_validator(name).iter_errors(data))
    if error is not None:
        where = "/".join(str(part) for part in error.absolute_path) or "<root>"
        raise InvalidOptionError(f"{name.replace('_', ' ')}: {where}: {error.message}")
    return dict(data)


def contract_errors(name: str, data: Any) -> list:
    """Все нарушения контракта в виде сообщений (пустой список, если их нет)."""
    return sorted(e.message for e in contract_validator(name).iter_errors(data))


# =============================================================================
# BUILDERS
# =============================================================================


def options_from_config(data: Mapping[str, Any]) -> ComparisonOptions:
    """
    ComparisonOptions из JSON-объекта.

    Examples:
        >>> options_from_config({"epsilon": 0.5}).epsilon
        0.5

    Raises:
        InvalidOptionError: Если данные не соответствуют контракту
    """
    fields = check_contract(COMPARISON_OPTIONS, data)
    try:
        return ComparisonOptions(**fields)
    except ValidationError as e:
        raise InvalidOptionError(f"comparison options: {e}") from e


def table_from_config(data: Mapping[str, Any], entries: Any = None) -> HashTable:
    """
    HashTable со свойствами из JSON-объекта.

    Args:
        data: Свойства таблицы (size, rehash_size, test, ...)
        entries: Начальные записи

    Raises:
        InvalidOptionError: Если свойства не соответствуют контракту
    """
    fields = check_contract(TABLE_PROPERTIES, data)
    try:
        return HashTable(entries, **fields)
    except ValidationError as e:
        raise InvalidOptionError(f"table properties: {e}") from e


def load_options(path: Union[str, Path]) -> ComparisonOptions:
    """
    Опции сравнения из JSON-файла настроек.

    Raises:
        InvalidOptionError: Если файл не JSON или нарушает контракт
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidOptionError(f"comparison options: {path}: {e}") from e
    return options_from_config(data)
