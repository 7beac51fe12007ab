"""Round-trip oracle: the two inverse checks run against every candidate.

Decode -> Encode:
    decode(data) fails              -> inconclusive
    decode ok, encode fails         -> defect
    decode ok, encode(v) != data    -> defect
    otherwise                       -> conclusive

Encode -> Decode:
    encode(values) fails            -> inconclusive
    encode ok, decode fails         -> defect
    encode ok, decode(b) != values  -> defect
    otherwise                       -> conclusive

The codec is expected to be a bijection between its typed value domain and
a canonical byte encoding. A defect is returned as data, carrying both sides
of the failed comparison; turning it into a crash is the driver's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from .codec import AbiCodec, Descriptor
from .errors import DecodeError, EncodeError
from .values import ValueSet, describe_values

__all__ = [
    "Defect",
    "RoundTripDirection",
    "Verdict",
    "check_decode_encode",
    "check_encode_decode",
]


class RoundTripDirection(StrEnum):
    """Which composition failed.

    StrEnum provides automatic string conversion: str(DECODE_ENCODE) == "decode_encode"
    """

    DECODE_ENCODE = "decode_encode"
    """decode(data) succeeded; encode of the result did not reproduce data."""

    ENCODE_DECODE = "encode_decode"
    """encode(values) succeeded; decode of the result did not reproduce values."""


@dataclass(frozen=True, slots=True)
class Defect:
    """A discovered round-trip inconsistency.

    Attributes:
        direction: Which composition failed
        function: Name of the function the round trip ran under
        reason: Short description of the failure
        expected: The original side (hex bytes or rendered values)
        actual: What came back, or "" when the second half raised
        error: Message of the codec error from the second half, if any
    """

    direction: RoundTripDirection
    function: str
    reason: str
    expected: str
    actual: str = ""
    error: str = ""

    def describe(self) -> str:
        lines = [
            f"{self.direction} round trip failed for {self.function!r}: {self.reason}",
            f"input : {self.expected}",
            f"output: {self.actual}",
        ]
        if self.error:
            lines.append(f"error : {self.error}")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class Verdict:
    """Outcome of one check: conclusive round trip, miss, or defect."""

    conclusive: bool = False
    defect: Defect | None = None


INCONCLUSIVE = Verdict()
CONCLUSIVE = Verdict(conclusive=True)


def check_decode_encode(codec: AbiCodec, descriptor: Descriptor, data: bytes) -> Verdict:
    """Decode data, re-encode the result, and require the original bytes."""
    name = descriptor.name
    try:
        values = codec.decode(descriptor, name, data)
    except DecodeError:
        return INCONCLUSIVE

    try:
        output = codec.encode(descriptor, name, values)
    except EncodeError as e:
        return Verdict(
            defect=Defect(
                RoundTripDirection.DECODE_ENCODE, name,
                "re-encode of decoded values failed",
                expected=data.hex(), error=str(e),
            ),
        )

    if output != data:
        return Verdict(
            defect=Defect(
                RoundTripDirection.DECODE_ENCODE, name,
                "re-encoded bytes differ from input",
                expected=data.hex(), actual=output.hex(),
            ),
        )
    return CONCLUSIVE


def check_encode_decode(codec: AbiCodec, descriptor: Descriptor, values: ValueSet) -> Verdict:
    """Encode values, decode the result, and require deep-equal values."""
    name = descriptor.name
    try:
        packed = codec.encode(descriptor, name, values)
    except EncodeError:
        return INCONCLUSIVE

    try:
        decoded = codec.decode(descriptor, name, packed)
    except DecodeError as e:
        return Verdict(
            defect=Defect(
                RoundTripDirection.ENCODE_DECODE, name,
                "decode of encoded values failed",
                expected=describe_values(values), error=str(e),
            ),
        )

    if decoded != tuple(values):
        return Verdict(
            defect=Defect(
                RoundTripDirection.ENCODE_DECODE, name,
                "decoded values differ from input",
                expected=describe_values(values), actual=describe_values(decoded),
            ),
        )
    return CONCLUSIVE
