"""Keccak-256 backend (the pre-standard SHA-3 padding used by Ethereum)."""

from __future__ import annotations

from Crypto.Hash import keccak

from fast_smt.types import H256


class Keccak256Hasher:
    """Keccak-256 via pycryptodome."""

    def __init__(self) -> None:
        self._state = keccak.new(digest_bits=256)

    def write_bytes(self, data: bytes) -> None:
        self._state.update(data)

    def finish(self) -> H256:
        return H256(self._state.digest())
