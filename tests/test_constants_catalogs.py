"""Search-space catalogs: shape and contents."""

from abifuzz.constants import (
    ARGUMENT_NAMES,
    ARGUMENT_TYPES,
    FUNCTION_NAMES,
    PAYABLES,
    STATE_MUTABILITIES,
)


class TestCatalogs:
    """Catalog contents the generator depends on."""

    def test_function_names(self) -> None:
        assert len(FUNCTION_NAMES) == 8
        assert "" in FUNCTION_NAMES
        assert {"name", "NAME", "_name_", "__"} <= set(FUNCTION_NAMES)

    def test_modifiers(self) -> None:
        assert STATE_MUTABILITIES == (None, "", "pure", "view", "payable")
        assert PAYABLES == (None, True, False)

    def test_argument_names_extend_function_names(self) -> None:
        assert len(ARGUMENT_NAMES) == 15
        assert ARGUMENT_NAMES[:7] == ("a", "b", "c", "d", "e", "f", "g")
        assert ARGUMENT_NAMES[7:] == FUNCTION_NAMES

    def test_every_integer_width_present(self) -> None:
        for bits in range(8, 257, 8):
            assert f"uint{bits}" in ARGUMENT_TYPES
            assert f"int{bits}" in ARGUMENT_TYPES

    def test_fixed_bytes_and_dynamic_types(self) -> None:
        for size in range(1, 32):
            assert f"bytes{size}" in ARGUMENT_TYPES
        assert {"bool", "address", "bytes", "string", "uint", "int"} <= set(ARGUMENT_TYPES)

    def test_deliberately_invalid_types(self) -> None:
        assert "byte32" in ARGUMENT_TYPES
        assert "byte" in ARGUMENT_TYPES

    def test_narrow_integers_weighted_double(self) -> None:
        assert ARGUMENT_TYPES.count("uint8") == 2
        assert ARGUMENT_TYPES.count("int8") == 2
        assert ARGUMENT_TYPES.count("uint16") == 1

    def test_catalogs_are_immutable(self) -> None:
        for catalog in (FUNCTION_NAMES, STATE_MUTABILITIES, PAYABLES, ARGUMENT_NAMES, ARGUMENT_TYPES):
            assert isinstance(catalog, tuple)
