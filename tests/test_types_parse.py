"""ABI type parsing into the tagged union."""

import pytest
from hypothesis import event, given

from abifuzz.errors import SignatureParseError
from abifuzz.types import (
    AddressType,
    BoolType,
    BytesType,
    DynamicArrayType,
    FixedArrayType,
    FixedBytesType,
    IntType,
    StringType,
    parse_type,
    scalar_base,
)
from tests.strategies import abi_types


class TestParseScalars:
    """Scalar type strings."""

    @pytest.mark.parametrize(
        ("type_str", "expected"),
        [
            ("bool", BoolType()),
            ("address", AddressType()),
            ("bytes", BytesType()),
            ("string", StringType()),
            ("uint8", IntType(8, signed=False)),
            ("int24", IntType(24, signed=True)),
            ("uint256", IntType(256, signed=False)),
            ("bytes1", FixedBytesType(1)),
            ("bytes32", FixedBytesType(32)),
        ],
    )
    def test_scalar(self, type_str: str, expected: object) -> None:
        assert parse_type(type_str) == expected

    @pytest.mark.parametrize("type_str", ["uint", "int"])
    def test_bare_integers_need_a_width(self, type_str: str) -> None:
        with pytest.raises(SignatureParseError):
            parse_type(type_str)


class TestParseArrays:
    """Array suffixes nest left to right."""

    def test_dynamic(self) -> None:
        assert parse_type("uint8[]") == DynamicArrayType(IntType(8, signed=False))

    def test_fixed(self) -> None:
        assert parse_type("bool[3]") == FixedArrayType(BoolType(), 3)

    def test_dynamic_then_fixed(self) -> None:
        parsed = parse_type("string[][5]")
        assert parsed == FixedArrayType(DynamicArrayType(StringType()), 5)
        assert str(parsed) == "string[][5]"

    def test_scalar_base(self) -> None:
        assert scalar_base(parse_type("bytes4[2][]")) == "bytes4"
        assert scalar_base(parse_type("address")) == "address"


class TestParseRejects:
    """Malformed or unsupported type strings never compile."""

    @pytest.mark.parametrize(
        "type_str",
        [
            "uint7",
            "int264",
            "bytes0",
            "bytes33",
            "byte",
            "byte32",
            "uint8[]]",
            "uint8[[3]]",
            "uint8[-1]",
            "uint8[0]",
            "fixed128x18",
            "(uint8,bool)",
            "",
            "Uint8",
        ],
    )
    def test_rejected(self, type_str: str) -> None:
        with pytest.raises(SignatureParseError):
            parse_type(type_str)

    def test_error_carries_source(self) -> None:
        with pytest.raises(SignatureParseError) as exc_info:
            parse_type("uint7")
        assert exc_info.value.source == "uint7"


class TestCanonicalRendering:
    """str() of a parsed type parses back to the same type."""

    @given(abi_types)
    def test_str_reparses(self, abi_type: object) -> None:
        event(f"base={scalar_base(abi_type)}")  # type: ignore[arg-type]
        assert parse_type(str(abi_type)) == abi_type
