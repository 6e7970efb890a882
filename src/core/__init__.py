"""
Core domain models, numeric primitives, and comparison options.

This module contains the foundational building blocks the dispatch
protocol is built on: value categories, domain value types, numeric
tolerance helpers, and the option contracts.
"""
