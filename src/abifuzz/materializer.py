"""Value materializer: placeholders drawn from the raw fuzz input.

The raw input is replayed as a Hypothesis choice sequence: a strategy per
argument type is run through fuzz_one_input, so the same bytes always build
the same value set. The input is zero-padded to MATERIALIZER_BUFFER_SIZE;
zero choices are the simplest draws, so an empty or all-zero input yields
the zero value of every type.

Shapes follow the declared types:

- scalars draw at their container width
- bytes/string draw up to MAX_DYNAMIC_LENGTH items
- fixed arrays draw exactly N items, dynamic arrays up to
  MAX_DYNAMIC_ARRAY_LENGTH

Integers are drawn over the smallest native container that holds them (8,
16, 32 or 64 bits, else 256) and reinterpreted as two's complement for
signed types. Odd widths such as uint24 therefore draw values that can
exceed the declared range; those fail to encode and exercise the
inconclusive path of the encode direction.
"""

from __future__ import annotations

from collections.abc import Sequence
from functools import lru_cache

from hypothesis import given, settings
from hypothesis import strategies as st

from .codec import Parameter
from .constants import (
    MATERIALIZER_BUFFER_SIZE,
    MAX_DYNAMIC_ARRAY_LENGTH,
    MAX_DYNAMIC_LENGTH,
    PLACEHOLDER_STRATEGY_CACHE_SIZE,
)
from .types import (
    AbiType,
    AddressType,
    BoolType,
    BytesType,
    DynamicArrayType,
    FixedArrayType,
    FixedBytesType,
    IntType,
    StringType,
)
from .values import (
    ADDRESS_SIZE,
    AbiValue,
    AddressValue,
    ArrayValue,
    BoolValue,
    BytesValue,
    FixedBytesValue,
    IntValue,
    StringValue,
    ValueSet,
    zero_values,
)

__all__ = ["container_bits", "materialize", "placeholder_values"]

_NATIVE_WIDTHS = (8, 16, 32, 64)


def container_bits(bits: int) -> int:
    """Width of the native container an integer of the given width lives in."""
    for width in _NATIVE_WIDTHS:
        if bits <= width:
            return width
    return 256


def _integers(int_type: IntType) -> st.SearchStrategy[AbiValue]:
    width = container_bits(int_type.bits)
    raw = st.integers(min_value=0, max_value=(1 << width) - 1)
    if int_type.signed:
        sign_bit = 1 << (width - 1)
        raw = raw.map(lambda n: n - (sign_bit << 1) if n & sign_bit else n)
    return raw.map(lambda n: IntValue(int_type, n))


@lru_cache(maxsize=PLACEHOLDER_STRATEGY_CACHE_SIZE)
def placeholder_values(abi_type: AbiType) -> st.SearchStrategy[AbiValue]:
    """Strategy for placeholder values of a type.

    Unlike encodable-domain strategies, integers may overflow their declared
    width (see container_bits).

    Raises:
        TypeError: abi_type is not an AbiType
    """
    match abi_type:
        case BoolType():
            return st.builds(BoolValue, st.booleans())
        case IntType():
            return _integers(abi_type)
        case AddressType():
            return st.binary(min_size=ADDRESS_SIZE, max_size=ADDRESS_SIZE).map(AddressValue)
        case FixedBytesType(size=size):
            return st.binary(min_size=size, max_size=size).map(
                lambda b: FixedBytesValue(abi_type, b),
            )
        case BytesType():
            return st.binary(max_size=MAX_DYNAMIC_LENGTH).map(BytesValue)
        case StringType():
            return st.text(max_size=MAX_DYNAMIC_LENGTH).map(StringValue)
        case FixedArrayType(item=item, length=length):
            return st.lists(
                placeholder_values(item), min_size=length, max_size=length,
            ).map(lambda items: ArrayValue(abi_type, tuple(items)))
        case DynamicArrayType(item=item):
            return st.lists(
                placeholder_values(item), max_size=MAX_DYNAMIC_ARRAY_LENGTH,
            ).map(lambda items: ArrayValue(abi_type, tuple(items)))
    msg = f"Unknown ABI type: {abi_type!r}"
    raise TypeError(msg)


class _PlaceholderDraw:
    """Replays a byte buffer through Hypothesis to build one value set.

    The @given target is created once, at import; fuzz_one_input then runs it
    against each buffer without Hypothesis' search loop.
    """

    def __init__(self) -> None:
        self._types: tuple[AbiType, ...] = ()
        self._values: ValueSet | None = None

        @settings(database=None, deadline=None)
        @given(st.data())
        def draw(data: st.DataObject) -> None:
            self._values = tuple(data.draw(placeholder_values(t)) for t in self._types)

        self._fuzz_one_input = draw.hypothesis.fuzz_one_input

    def __call__(self, types: tuple[AbiType, ...], buffer: bytes) -> ValueSet | None:
        """Values drawn from buffer, or None when the buffer ran out."""
        self._types, self._values = types, None
        self._fuzz_one_input(buffer)
        return self._values


_draw_placeholders = _PlaceholderDraw()


def materialize(parameters: Sequence[Parameter], data: bytes) -> ValueSet:
    """Build one value per parameter, drawn from data.

    Returns the zero values untouched when data or parameters is empty, or
    when the type shapes need more choices than the padded buffer holds.
    """
    types = tuple(p.type for p in parameters)
    if not data or not types:
        return zero_values(types)
    buffer = data[:MATERIALIZER_BUFFER_SIZE].ljust(MATERIALIZER_BUFFER_SIZE, b"\x00")
    values = _draw_placeholders(types, buffer)
    if values is None:
        return zero_values(types)
    return values
