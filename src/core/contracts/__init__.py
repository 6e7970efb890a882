"""
Contracts Module

Конфигурация сравнения (Pydantic модель) и JSON Schema контракты
для конфигурации, загружаемой из JSON.
"""

from .options import (
    DEFAULT_OPTIONS,
    ComparisonOptions,
    InvalidOptionError,
    make_options,
)
from .validators import (
    COMPARISON_OPTIONS,
    TABLE_PROPERTIES,
    check_contract,
    contract_errors,
    contract_validator,
    load_options,
    options_from_config,
    table_from_config,
)

__all__ = [
    # Options
    "DEFAULT_OPTIONS",
    "ComparisonOptions",
    "InvalidOptionError",
    "make_options",
    # Contracts
    "COMPARISON_OPTIONS",
    "TABLE_PROPERTIES",
    "check_contract",
    "contract_errors",
    "contract_validator",
    # Builders
    "load_options",
    "options_from_config",
    "table_from_config",
]
