"""Helpers shared across tree tests."""

from __future__ import annotations

from fast_smt.hashing import Blake2bHasher, digest
from fast_smt.types import H256


def key_at(path: int) -> H256:
    """The 32-byte key whose little-endian value is `path`."""
    return H256(path.to_bytes(32, "little"))


def value_of(label: str) -> H256:
    """A non-zero value derived from `label`."""
    return digest(Blake2bHasher, label.encode())


__all__ = ["key_at", "value_of"]
