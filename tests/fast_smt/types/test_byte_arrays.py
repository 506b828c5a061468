"""Tests for fixed-length byte types."""

from __future__ import annotations

import pytest
from pydantic import ValidationError, create_model

from fast_smt.types import ZERO_HASH, Bytes32, H256


class TestConstruction:
    """Tests for building byte values from various inputs."""

    def test_from_bytes(self) -> None:
        """Exactly 32 bytes are accepted as-is."""
        value = H256(b"\xab" * 32)
        assert bytes(value) == b"\xab" * 32

    def test_from_hex_with_prefix(self) -> None:
        """Hex strings may carry a 0x prefix."""
        assert H256("0x" + "11" * 32) == H256(b"\x11" * 32)

    def test_from_iterable(self) -> None:
        """An iterable of byte values is accepted."""
        assert H256(range(32))[31] == 31

    @pytest.mark.parametrize("length", [0, 31, 33])
    def test_wrong_length_rejected(self, length: int) -> None:
        """Any other length is rejected."""
        with pytest.raises(ValueError, match="expects exactly 32 bytes"):
            H256(b"\x00" * length)


class TestZero:
    """Tests for the zero digest."""

    def test_zero_hash_is_zero(self) -> None:
        """The module-level zero digest is all zero bytes."""
        assert ZERO_HASH.is_zero()
        assert bytes(ZERO_HASH) == b"\x00" * 32

    def test_single_set_byte_is_not_zero(self) -> None:
        """One non-zero byte is enough to be non-zero."""
        assert not H256(b"\x00" * 31 + b"\x01").is_zero()

    def test_zero_is_typed(self) -> None:
        """`zero()` returns an instance of the class it is called on."""
        assert type(H256.zero()) is H256
        assert type(Bytes32.zero()) is Bytes32


class TestEncoding:
    """Tests for raw byte encoding."""

    def test_decode_bytes(self) -> None:
        """Decoding 32 bytes yields the same value."""
        raw = bytes(range(32))
        assert H256.decode_bytes(raw).encode_bytes() == raw

    def test_decode_bytes_wrong_length(self) -> None:
        """Decoding a short buffer fails."""
        with pytest.raises(ValueError):
            H256.decode_bytes(b"\x00" * 16)

    def test_as_bytes(self) -> None:
        """A digest hashes into a leaf as its raw bytes."""
        value = H256(b"\x07" * 32)
        assert value.as_bytes() == b"\x07" * 32

    def test_repr_and_hex(self) -> None:
        """The representation shows the type name and hex content."""
        value = H256(b"\x01" * 32)
        assert value.hex() == "01" * 32
        assert repr(value) == f"H256({'01' * 32})"

    def test_hash_distinguishes_types(self) -> None:
        """Values of different byte types never share a set slot."""
        raw = b"\x05" * 32
        assert hash(H256(raw)) != hash(Bytes32(raw))


class TestPydantic:
    """Tests for pydantic integration."""

    def test_field_accepts_instance(self) -> None:
        """A model field accepts an existing instance."""
        model = create_model("Model", value=(H256, ...))
        instance = model(value=H256(b"\x02" * 32))
        assert instance.value == H256(b"\x02" * 32)

    def test_field_coerces_bytes(self) -> None:
        """A model field coerces raw bytes to the declared type."""
        model = create_model("Model", value=(H256, ...))
        instance = model(value=b"\x03" * 32)
        assert isinstance(instance.value, H256)

    def test_field_rejects_wrong_length(self) -> None:
        """A model field rejects a buffer of the wrong length."""
        model = create_model("Model", value=(H256, ...))
        with pytest.raises(ValidationError):
            model(value=b"\x03" * 31)

    def test_serializes_to_hex(self) -> None:
        """JSON output carries the hex string."""
        model = create_model("Model", value=(H256, ...))
        instance = model(value=H256(b"\x04" * 32))
        assert instance.model_dump(mode="json") == {"value": "04" * 32}

    def test_json_round_trip(self) -> None:
        """JSON input is the hex string produced by serialization."""
        model = create_model("Model", value=(H256, ...))
        instance = model(value=H256(b"\x04" * 32))
        assert model.model_validate_json(instance.model_dump_json()) == instance
