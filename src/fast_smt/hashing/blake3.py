"""BLAKE3 backend."""

from __future__ import annotations

import blake3

from fast_smt.constants import BYTES_PER_DIGEST
from fast_smt.types import H256


class Blake3Hasher:
    """BLAKE3 in its default hashing mode, 32-byte output."""

    def __init__(self) -> None:
        self._state = blake3.blake3()

    def write_bytes(self, data: bytes) -> None:
        self._state.update(data)

    def finish(self) -> H256:
        return H256(self._state.digest(length=BYTES_PER_DIGEST))
