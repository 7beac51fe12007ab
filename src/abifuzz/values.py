"""Typed ABI values: a tagged union mirroring abifuzz.types.

Values are frozen dataclasses, so deep equality is structural equality and
needs no reflection. A value set (one value per declared argument) is a
plain tuple.

The codec works on eth-abi's native Python representation; to_native and
from_native convert at that boundary:

    BoolValue        <-> bool
    IntValue         <-> int
    AddressValue     <-> lowercase hex str (out) / checksummed hex str (in)
    FixedBytesValue  <-> bytes of exactly N
    BytesValue       <-> bytes
    StringValue      <-> str
    ArrayValue       <-> tuple of items

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

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

__all__ = [
    "AbiValue",
    "AddressValue",
    "ArrayValue",
    "BoolValue",
    "BytesValue",
    "FixedBytesValue",
    "IntValue",
    "StringValue",
    "ValueSet",
    "describe_values",
    "from_native",
    "to_native",
    "zero_value",
    "zero_values",
]

ADDRESS_SIZE = 20


@dataclass(frozen=True, slots=True)
class BoolValue:
    value: bool = False


@dataclass(frozen=True, slots=True)
class IntValue:
    """Integer tagged with its declared width.

    value may lie outside the type's range; such values are unencodable and
    make the encode direction inconclusive.
    """

    type: IntType
    value: int = 0


@dataclass(frozen=True, slots=True)
class AddressValue:
    data: bytes = bytes(ADDRESS_SIZE)


@dataclass(frozen=True, slots=True)
class FixedBytesValue:
    type: FixedBytesType
    data: bytes = b""


@dataclass(frozen=True, slots=True)
class BytesValue:
    data: bytes = b""


@dataclass(frozen=True, slots=True)
class StringValue:
    text: str = ""


@dataclass(frozen=True, slots=True)
class ArrayValue:
    """Fixed or dynamic array; type records which."""

    type: FixedArrayType | DynamicArrayType
    items: tuple[AbiValue, ...] = ()


type AbiValue = (
    BoolValue
    | IntValue
    | AddressValue
    | FixedBytesValue
    | BytesValue
    | StringValue
    | ArrayValue
)

type ValueSet = tuple[AbiValue, ...]


def zero_value(abi_type: AbiType) -> AbiValue:
    """Return the zero value for a type."""
    match abi_type:
        case BoolType():
            return BoolValue(False)
        case IntType():
            return IntValue(abi_type, 0)
        case AddressType():
            return AddressValue(bytes(ADDRESS_SIZE))
        case FixedBytesType(size=size):
            return FixedBytesValue(abi_type, bytes(size))
        case BytesType():
            return BytesValue(b"")
        case StringType():
            return StringValue("")
        case FixedArrayType(item=item, length=length):
            return ArrayValue(abi_type, tuple(zero_value(item) for _ in range(length)))
        case DynamicArrayType():
            return ArrayValue(abi_type, ())
    msg = f"Unknown ABI type: {abi_type!r}"
    raise TypeError(msg)


def zero_values(types: Iterable[AbiType]) -> ValueSet:
    """Zero-valued placeholder per declared type."""
    return tuple(zero_value(t) for t in types)


def to_native(value: AbiValue) -> Any:
    """Convert a typed value into what eth-abi's encoders accept."""
    match value:
        case BoolValue(value=flag):
            return flag
        case IntValue(value=number):
            return number
        case AddressValue(data=data):
            # Lowercase hex skips checksum validation.
            return "0x" + data.hex()
        case FixedBytesValue(data=data) | BytesValue(data=data):
            return data
        case StringValue(text=text):
            return text
        case ArrayValue(items=items):
            return tuple(to_native(item) for item in items)
    msg = f"Unknown ABI value: {value!r}"
    raise TypeError(msg)


def from_native(abi_type: AbiType, native: Any) -> AbiValue:
    """Convert a value decoded by eth-abi back into the tagged union.

    Raises:
        TypeError: native does not match the shape of abi_type
    """
    match abi_type:
        case BoolType():
            return BoolValue(bool(native))
        case IntType():
            return IntValue(abi_type, int(native))
        case AddressType():
            # eth-abi decodes addresses as checksummed "0x..." strings.
            if isinstance(native, str):
                return AddressValue(bytes.fromhex(native.removeprefix("0x")))
            return AddressValue(bytes(native))
        case FixedBytesType():
            return FixedBytesValue(abi_type, bytes(native))
        case BytesType():
            return BytesValue(bytes(native))
        case StringType():
            return StringValue(str(native))
        case FixedArrayType(item=item) | DynamicArrayType(item=item):
            return ArrayValue(abi_type, tuple(from_native(item, n) for n in native))
    msg = f"Unknown ABI type: {abi_type!r}"
    raise TypeError(msg)


def _describe(value: AbiValue) -> str:
    match value:
        case BoolValue(value=flag):
            return "true" if flag else "false"
        case IntValue(type=int_type, value=number):
            return f"{int_type}({number})"
        case AddressValue(data=data):
            return f"address(0x{data.hex()})"
        case FixedBytesValue(type=fixed_type, data=data):
            return f"{fixed_type}(0x{data.hex()})"
        case BytesValue(data=data):
            return f"bytes(0x{data.hex()})"
        case StringValue(text=text):
            return f"string({text!r})"
        case ArrayValue(type=array_type, items=items):
            return f"{array_type}[{', '.join(_describe(i) for i in items)}]"
    return repr(value)


def describe_values(values: Sequence[AbiValue]) -> str:
    """Render a value set for diagnostics, e.g. (uint8(0), bytes(0x01))."""
    return "(" + ", ".join(_describe(v) for v in values) + ")"
