"""
Test suite for structural-compare

Contains:
- tests/unit/          : Unit tests for individual modules and protocol properties
"""
