"""Tests for the unsigned integer types."""

from __future__ import annotations

import pytest
from pydantic import ValidationError, create_model

from fast_smt.types import BaseUint, StrictBaseModel, Uint8, Uint32, Uint256


@pytest.mark.parametrize("uint_class", [Uint8, Uint32, Uint256])
def test_bounds(uint_class: type[BaseUint]) -> None:
    """Both ends of the range are accepted; one past either end is not."""
    max_value = 2**uint_class.BITS - 1
    assert int(uint_class(0)) == 0
    assert int(uint_class(max_value)) == max_value
    with pytest.raises(OverflowError):
        uint_class(max_value + 1)
    with pytest.raises(OverflowError):
        uint_class(-1)


@pytest.mark.parametrize("uint_class", [Uint8, Uint32, Uint256])
def test_pydantic_rejects_out_of_range(uint_class: type[BaseUint]) -> None:
    """Model fields turn overflow into a validation error."""
    model = create_model("Model", value=(uint_class, ...))
    assert model(value=uint_class(1)).value == uint_class(1)
    with pytest.raises(ValidationError):
        model(value=2**uint_class.BITS)


@pytest.mark.parametrize(
    "uint_class, value, expected",
    [
        (Uint8, 0xAB, b"\xab"),
        (Uint32, 1, b"\x01\x00\x00\x00"),
        (Uint32, 0x01020304, b"\x04\x03\x02\x01"),
        (Uint256, 1, b"\x01" + b"\x00" * 31),
    ],
)
def test_encode_is_fixed_width_little_endian(
    uint_class: type[BaseUint], value: int, expected: bytes
) -> None:
    """Encodings are little-endian and padded to the full width."""
    assert uint_class(value).encode_bytes() == expected
    assert uint_class.decode_bytes(expected) == uint_class(value)


def test_decode_wrong_width() -> None:
    """Decoding insists on the exact width."""
    with pytest.raises(ValueError, match="expects exactly 4 bytes"):
        Uint32.decode_bytes(b"\x00\x00\x00")


def test_mixed_type_comparison_raises() -> None:
    """Values of different widths, or plain ints, never compare silently."""
    with pytest.raises(TypeError):
        _ = Uint32(1) == Uint8(1)
    with pytest.raises(TypeError):
        _ = Uint256(1) < 2


def test_same_type_ordering() -> None:
    """Values of one type order like integers."""
    assert Uint256(1) < Uint256(2)
    assert sorted([Uint32(3), Uint32(1), Uint32(2)]) == [Uint32(1), Uint32(2), Uint32(3)]


def test_repr_and_str() -> None:
    """The representation names the type; str is the bare number."""
    assert repr(Uint32(7)) == "Uint32(7)"
    assert str(Uint32(7)) == "7"


class TestModelField:
    """A width-checked integer used as a field of a strict record."""

    class Header(StrictBaseModel):
        count: Uint32

    def test_python_input_keeps_type(self) -> None:
        """Validated values come back as the declared width."""
        header = self.Header(count=Uint32(5))
        assert isinstance(header.count, Uint32)
        assert header.count == Uint32(5)

    def test_python_input_out_of_range(self) -> None:
        """Overflow is reported as a validation error."""
        with pytest.raises(ValidationError):
            self.Header(count=2**32)

    def test_dumps_as_plain_int(self) -> None:
        """Both dump modes emit bare integers."""
        header = self.Header(count=Uint32(5))
        assert header.model_dump() == {"count": 5}
        assert header.model_dump_json() == '{"count":5}'

    def test_json_input_keeps_type(self) -> None:
        """JSON integers are range-checked and wrapped in the declared width."""
        header = self.Header.model_validate_json('{"count": 7}')
        assert isinstance(header.count, Uint32)
        assert header.count == Uint32(7)
        with pytest.raises(ValidationError):
            self.Header.model_validate_json('{"count": -1}')
