"""
Core math modules

Числовые примитивы для правил сравнения чисел.
"""

from src.core.math.numerical_safeguards import (
    # Constants
    SIGN_EQUAL,
    SIGN_GREATER,
    SIGN_LESS,
    # Type checks
    is_nan,
    is_number,
    is_real,
    # Validation
    validate_tolerance,
    # Comparisons
    exact_sign,
    within_tolerance,
)

__all__ = [
    # Constants
    "SIGN_EQUAL",
    "SIGN_GREATER",
    "SIGN_LESS",
    # Type checks
    "is_nan",
    "is_number",
    "is_real",
    # Validation
    "validate_tolerance",
    # Comparisons
    "exact_sign",
    "within_tolerance",
]
