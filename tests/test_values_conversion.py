"""Typed values: zero values, native conversion, diagnostics."""

from hypothesis import given
from hypothesis import strategies as st

from abifuzz.types import (
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
from abifuzz.values import (
    AbiValue,
    AddressValue,
    ArrayValue,
    BoolValue,
    BytesValue,
    FixedBytesValue,
    IntValue,
    StringValue,
    describe_values,
    from_native,
    to_native,
    zero_value,
    zero_values,
)
from tests.strategies import abi_types, abi_values

UINT8 = IntType(8, signed=False)


class TestZeroValues:
    """Placeholders start zero-valued, shaped by their type."""

    def test_scalars(self) -> None:
        assert zero_value(BoolType()) == BoolValue(False)
        assert zero_value(UINT8) == IntValue(UINT8, 0)
        assert zero_value(AddressType()) == AddressValue(bytes(20))
        assert zero_value(FixedBytesType(4)) == FixedBytesValue(FixedBytesType(4), bytes(4))
        assert zero_value(BytesType()) == BytesValue(b"")
        assert zero_value(StringType()) == StringValue("")

    def test_fixed_array_holds_length_zero_items(self) -> None:
        array_type = FixedArrayType(UINT8, 3)
        value = zero_value(array_type)
        assert value == ArrayValue(array_type, (IntValue(UINT8, 0),) * 3)

    def test_dynamic_array_is_empty(self) -> None:
        array_type = DynamicArrayType(BoolType())
        assert zero_value(array_type) == ArrayValue(array_type, ())

    def test_zero_values_per_type(self) -> None:
        values = zero_values([BoolType(), StringType()])
        assert values == (BoolValue(False), StringValue(""))


class TestNativeConversion:
    """to_native / from_native bridge the eth-abi representation."""

    def test_address_from_checksummed_string(self) -> None:
        native = "0x" + "Ab" * 20
        assert from_native(AddressType(), native) == AddressValue(bytes.fromhex("ab" * 20))

    def test_address_to_native_is_lowercase_hex(self) -> None:
        assert to_native(AddressValue(b"\xab" * 20)) == "0x" + "ab" * 20

    def test_arrays_become_tuples(self) -> None:
        array_type = DynamicArrayType(UINT8)
        value = ArrayValue(array_type, (IntValue(UINT8, 1), IntValue(UINT8, 2)))
        assert to_native(value) == (1, 2)
        assert from_native(array_type, [1, 2]) == value

    @given(abi_types.flatmap(lambda t: st.tuples(st.just(t), abi_values(t))))
    def test_native_roundtrip(self, typed: tuple[AbiType, AbiValue]) -> None:
        abi_type, value = typed
        assert from_native(abi_type, to_native(value)) == value


class TestEquality:
    """Deep equality distinguishes type tags as well as contents."""

    def test_same_number_different_width(self) -> None:
        assert IntValue(UINT8, 1) != IntValue(IntType(16, signed=False), 1)

    def test_fixed_vs_dynamic_array(self) -> None:
        items = (BoolValue(True),)
        assert ArrayValue(FixedArrayType(BoolType(), 1), items) != ArrayValue(
            DynamicArrayType(BoolType()), items,
        )

    @given(st.binary(min_size=1, max_size=8))
    def test_bytes_equality(self, data: bytes) -> None:
        assert BytesValue(data) == BytesValue(bytes(data))


class TestDescribe:
    """Diagnostic rendering used in defect reports."""

    def test_describe(self) -> None:
        text = describe_values(
            (IntValue(UINT8, 7), BytesValue(b"\x01\xff"), StringValue("hi"), BoolValue(True)),
        )
        assert text == "(uint8(7), bytes(0x01ff), string('hi'), true)"

    def test_describe_array(self) -> None:
        array_type = FixedArrayType(UINT8, 2)
        text = describe_values((ArrayValue(array_type, (IntValue(UINT8, 1), IntValue(UINT8, 2))),))
        assert text == "(uint8[2][uint8(1), uint8(2)])"
