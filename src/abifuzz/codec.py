"""Codec boundary: compile interface descriptions, encode and decode values.

The harness treats the codec as a black box behind AbiCodec:

    parse(text) -> Descriptor              raises SignatureParseError
    decode(descriptor, name, data) -> ValueSet   raises DecodeError
    encode(descriptor, name, values) -> bytes    raises EncodeError

EthAbiCodec implements it on top of eth-abi. Only the library's documented
failure classes are mapped to CodecError subclasses; anything else escapes
unchanged, because an unexpected exception from the codec is itself a
finding.

Encoding packs the function's inputs and decoding unpacks its outputs,
without a 4-byte selector, so both directions operate on the same byte
layout.

Python 3.13+.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Protocol

from eth_abi.codec import ABICodec
from eth_abi.exceptions import DecodingError, EncodingError
from eth_abi.registry import registry as default_registry

from .constants import VALID_STATE_MUTABILITIES
from .errors import DecodeError, EncodeError, SignatureParseError
from .types import AbiType, parse_type
from .values import ValueSet, from_native, to_native

__all__ = [
    "AbiCodec",
    "Descriptor",
    "EthAbiCodec",
    "Parameter",
]


@dataclass(frozen=True, slots=True)
class Parameter:
    """One compiled argument: name and parsed type."""

    name: str
    type: AbiType


@dataclass(frozen=True, slots=True)
class Descriptor:
    """Compiled form of one function entry of an interface description."""

    name: str
    inputs: tuple[Parameter, ...] = ()
    outputs: tuple[Parameter, ...] = ()
    state_mutability: str | None = None
    payable: bool | None = None

    @property
    def input_types(self) -> tuple[AbiType, ...]:
        return tuple(p.type for p in self.inputs)

    @property
    def output_types(self) -> tuple[AbiType, ...]:
        return tuple(p.type for p in self.outputs)


class AbiCodec(Protocol):
    """Black-box codec the oracle verifies."""

    def parse(self, text: str) -> Descriptor: ...

    def decode(self, descriptor: Descriptor, name: str, data: bytes) -> ValueSet: ...

    def encode(self, descriptor: Descriptor, name: str, values: ValueSet) -> bytes: ...


def _parse_parameters(raw: Any, key: str, text: str) -> tuple[Parameter, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        msg = f"'{key}' must be a list"
        raise SignatureParseError(msg, text)

    params: list[Parameter] = []
    for entry in raw:
        if not isinstance(entry, dict):
            msg = f"'{key}' entries must be objects"
            raise SignatureParseError(msg, text)
        name = entry.get("name", "")
        type_str = entry.get("type")
        if not isinstance(name, str) or not isinstance(type_str, str):
            msg = f"'{key}' entries need string 'name' and 'type'"
            raise SignatureParseError(msg, text)
        params.append(Parameter(name, parse_type(type_str)))
    return tuple(params)


def _check_name(descriptor: Descriptor, name: str) -> None:
    if name != descriptor.name:
        msg = f"Descriptor is bound to {descriptor.name!r}, not {name!r}"
        raise ValueError(msg)


class EthAbiCodec:
    """AbiCodec backed by eth-abi.

    Args:
        strict: Passed to eth-abi's decoder; strict decoding rejects
            non-canonical padding of dynamic data
    """

    def __init__(self, *, strict: bool = True) -> None:
        self._codec = ABICodec(default_registry)
        self._strict = strict

    def parse(self, text: str) -> Descriptor:
        """Compile a JSON interface description holding one function.

        Raises:
            SignatureParseError: The description or any argument type is invalid
        """
        try:
            entries = json.loads(text)
        except json.JSONDecodeError as e:
            msg = f"Malformed interface description: {e}"
            raise SignatureParseError(msg, text) from e

        if not isinstance(entries, list) or len(entries) != 1:
            msg = "Interface description must hold exactly one entry"
            raise SignatureParseError(msg, text)
        entry = entries[0]
        if not isinstance(entry, dict) or entry.get("type", "function") != "function":
            msg = "Entry is not a function"
            raise SignatureParseError(msg, text)

        name = entry.get("name", "")
        if not isinstance(name, str):
            msg = "Function name must be a string"
            raise SignatureParseError(msg, text)

        state_mutability = entry.get("stateMutability")
        if state_mutability is not None and state_mutability not in VALID_STATE_MUTABILITIES:
            msg = f"Unknown stateMutability {state_mutability!r}"
            raise SignatureParseError(msg, text)

        payable = entry.get("payable")
        if payable is not None and not isinstance(payable, bool):
            msg = "'payable' must be a boolean"
            raise SignatureParseError(msg, text)

        return Descriptor(
            name=name,
            inputs=_parse_parameters(entry.get("inputs"), "inputs", text),
            outputs=_parse_parameters(entry.get("outputs"), "outputs", text),
            state_mutability=state_mutability,
            payable=payable,
        )

    def decode(self, descriptor: Descriptor, name: str, data: bytes) -> ValueSet:
        """Unpack data as the function's outputs.

        Raises:
            DecodeError: data is not a valid encoding for the output types
        """
        _check_name(descriptor, name)
        types = descriptor.output_types
        try:
            native = self._codec.decode(
                [str(t) for t in types], data, strict=self._strict,
            )
        except (DecodingError, UnicodeDecodeError) as e:
            msg = f"Cannot decode {len(data)} bytes as {name}: {e}"
            raise DecodeError(msg) from e
        return tuple(from_native(t, n) for t, n in zip(types, native, strict=True))

    def encode(self, descriptor: Descriptor, name: str, values: ValueSet) -> bytes:
        """Pack values as the function's inputs.

        Raises:
            EncodeError: a value is out of range or the wrong shape
        """
        _check_name(descriptor, name)
        types = descriptor.input_types
        if len(values) != len(types):
            msg = f"{name} takes {len(types)} arguments, got {len(values)}"
            raise EncodeError(msg)
        try:
            return self._codec.encode(
                [str(t) for t in types], [to_native(v) for v in values],
            )
        except (EncodingError, UnicodeEncodeError) as e:
            msg = f"Cannot encode values for {name}: {e}"
            raise EncodeError(msg) from e
