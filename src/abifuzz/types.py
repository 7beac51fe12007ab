"""ABI type model: an explicit tagged union over the supported type shapes.

Type strings are parsed with the eth-abi grammar and then folded into the
union below, so the materializer and oracle can pattern-match on shape
instead of reflecting on runtime classes.

Supported shapes:
    bool, intN/uintN (N in 8..256 step 8), address, bytesN (N in 1..32),
    bytes, string, T[N] (N >= 1), T[]

Everything else (fixed-point, tuples, functions, unknown bases) is rejected
with SignatureParseError.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from eth_abi.exceptions import ABITypeError, ParseError
from eth_abi.grammar import BasicType, parse

from .errors import SignatureParseError

__all__ = [
    "AbiType",
    "AddressType",
    "BoolType",
    "BytesType",
    "DynamicArrayType",
    "FixedArrayType",
    "FixedBytesType",
    "IntType",
    "StringType",
    "parse_type",
    "scalar_base",
]


@dataclass(frozen=True, slots=True)
class BoolType:
    """bool"""

    def __str__(self) -> str:
        return "bool"


@dataclass(frozen=True, slots=True)
class IntType:
    """Fixed-width integer, signed (intN) or unsigned (uintN)."""

    bits: int
    signed: bool

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def __str__(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"


@dataclass(frozen=True, slots=True)
class AddressType:
    """20-byte account address."""

    def __str__(self) -> str:
        return "address"


@dataclass(frozen=True, slots=True)
class FixedBytesType:
    """bytesN"""

    size: int

    def __str__(self) -> str:
        return f"bytes{self.size}"


@dataclass(frozen=True, slots=True)
class BytesType:
    """Dynamic byte sequence."""

    def __str__(self) -> str:
        return "bytes"


@dataclass(frozen=True, slots=True)
class StringType:
    """Dynamic UTF-8 string."""

    def __str__(self) -> str:
        return "string"


@dataclass(frozen=True, slots=True)
class FixedArrayType:
    """T[N]"""

    item: AbiType
    length: int

    def __str__(self) -> str:
        return f"{self.item}[{self.length}]"


@dataclass(frozen=True, slots=True)
class DynamicArrayType:
    """T[]"""

    item: AbiType

    def __str__(self) -> str:
        return f"{self.item}[]"


type AbiType = (
    BoolType
    | IntType
    | AddressType
    | FixedBytesType
    | BytesType
    | StringType
    | FixedArrayType
    | DynamicArrayType
)


def _basic_to_scalar(basic: BasicType, type_str: str) -> AbiType:
    """Map the element part of a parsed BasicType onto the union."""
    base, sub = basic.base, basic.sub
    match base:
        case "bool" if sub is None:
            return BoolType()
        case "address" if sub is None:
            return AddressType()
        case "string" if sub is None:
            return StringType()
        case "bytes" if sub is None:
            return BytesType()
        case "bytes" if isinstance(sub, int) and 1 <= sub <= 32:
            return FixedBytesType(sub)
        case "uint" | "int" if isinstance(sub, int) and sub % 8 == 0 and 8 <= sub <= 256:
            return IntType(sub, base == "int")
    msg = f"Unsupported ABI type: {type_str!r}"
    raise SignatureParseError(msg, type_str)


def parse_type(type_str: str) -> AbiType:
    """Parse an ABI type string into the tagged union.

    Args:
        type_str: Type string such as "uint8", "bytes", "address[3][]"

    Returns:
        The parsed AbiType

    Raises:
        SignatureParseError: Malformed grammar, invalid parameters
            (e.g. uint7, bytes33), unsupported shapes, or zero-length arrays
    """
    try:
        parsed = parse(type_str)
        parsed.validate()
    except (ParseError, ABITypeError) as e:
        msg = f"Invalid ABI type {type_str!r}: {e}"
        raise SignatureParseError(msg, type_str) from e

    if not isinstance(parsed, BasicType):
        msg = f"Unsupported ABI type: {type_str!r}"
        raise SignatureParseError(msg, type_str)

    abi_type = _basic_to_scalar(parsed, type_str)
    for dim in parsed.arrlist or ():
        if not dim:
            abi_type = DynamicArrayType(abi_type)
            continue
        if dim[0] < 1:
            msg = f"Zero-length fixed array in {type_str!r}"
            raise SignatureParseError(msg, type_str)
        abi_type = FixedArrayType(abi_type, dim[0])
    return abi_type


def scalar_base(abi_type: AbiType) -> str:
    """Return the innermost element type name, e.g. "uint8" for uint8[][3]."""
    match abi_type:
        case FixedArrayType(item=item) | DynamicArrayType(item=item):
            return scalar_base(item)
        case _:
            return str(abi_type)
