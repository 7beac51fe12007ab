"""Shared constants and search-space catalogs for abifuzz.

Catalogs are the alphabet the signature generator draws from. They are
module-level tuples built once at import; randomness applies only to
selection, never to construction.

Constants are grouped by domain:
- Generator limits: argument counts, array-suffix odds, array lengths
- Materializer limits: dynamic lengths consumed from raw input
- Seeding: fallback seed for empty inputs
- Catalogs: function names, mutabilities, payabilities, argument names, types

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Generator limits
    "MAX_ARGUMENTS",
    "ARRAY_SUFFIX_ODDS",
    "MAX_FIXED_ARRAY_LENGTH",
    # Materializer limits
    "MAX_DYNAMIC_LENGTH",
    "MAX_DYNAMIC_ARRAY_LENGTH",
    "MATERIALIZER_BUFFER_SIZE",
    "PLACEHOLDER_STRATEGY_CACHE_SIZE",
    # Seeding
    "FALLBACK_SEED",
    # Catalogs
    "FUNCTION_NAMES",
    "STATE_MUTABILITIES",
    "PAYABLES",
    "ARGUMENT_NAMES",
    "ARGUMENT_TYPES",
    "VALID_STATE_MUTABILITIES",
]

# ============================================================================
# GENERATOR LIMITS
# ============================================================================

MAX_ARGUMENTS: int = 4
"""Upper bound (inclusive) on arguments per generated signature."""

ARRAY_SUFFIX_ODDS: int = 10
"""Each array-suffix roll succeeds with probability 1 / ARRAY_SUFFIX_ODDS."""

MAX_FIXED_ARRAY_LENGTH: int = 29
"""Upper bound (inclusive) on the N in a generated `T[N]` suffix."""

# ============================================================================
# MATERIALIZER LIMITS
# ============================================================================

MAX_DYNAMIC_LENGTH: int = 32
"""Upper bound on items drawn for one `bytes` or `string` value."""

MAX_DYNAMIC_ARRAY_LENGTH: int = 4
"""Upper bound on items materialized for one dynamic array."""

MATERIALIZER_BUFFER_SIZE: int = 8192
"""Raw input is truncated or zero-padded to this many bytes before drawing."""

PLACEHOLDER_STRATEGY_CACHE_SIZE: int = 1024
"""Placeholder strategies cached per distinct ABI type."""

# ============================================================================
# SEEDING
# ============================================================================

FALLBACK_SEED: int = 123456
"""Generator seed used when the raw input is empty."""

# ============================================================================
# CATALOGS
# ============================================================================

FUNCTION_NAMES: tuple[str, ...] = (
    "",
    "_name",
    "name",
    "NAME",
    "name_",
    "__",
    "_name_",
    "n",
)

# None means the key is omitted from the rendered description.
STATE_MUTABILITIES: tuple[str | None, ...] = (None, "", "pure", "view", "payable")

PAYABLES: tuple[bool | None, ...] = (None, True, False)

ARGUMENT_NAMES: tuple[str, ...] = ("a", "b", "c", "d", "e", "f", "g", *FUNCTION_NAMES)

# Mutability strings the descriptor compiler accepts ("" means unspecified).
VALID_STATE_MUTABILITIES: frozenset[str] = frozenset(
    {"", "pure", "view", "nonpayable", "payable"}
)


def _integer_types() -> tuple[str, ...]:
    widths = range(8, 257, 8)
    return tuple(f"{base}{bits}" for bits in widths for base in ("uint", "int"))


# uint8/int8 appear twice, doubling their draw weight. `byte32` and `byte`
# are invalid and exercise the compiler's rejection path.
ARGUMENT_TYPES: tuple[str, ...] = (
    "bool",
    "address",
    "bytes",
    "string",
    "uint",
    "int",
    "uint8",
    "int8",
    *_integer_types(),
    *(f"bytes{size}" for size in range(1, 32)),
    "byte32",
    "byte",
)
