"""Hypothesis strategies for abifuzz property-based testing.

Usage:
    from tests.strategies import abi_types, abi_values, typed_value_sets
"""

from .abi import (
    abi_types,
    abi_values,
    fixed_bytes_types,
    int_types,
    scalar_types,
    typed_value_sets,
)

__all__ = [
    "abi_types",
    "abi_values",
    "fixed_bytes_types",
    "int_types",
    "scalar_types",
    "typed_value_sets",
]
