"""SHA-256 backend."""

from __future__ import annotations

import hashlib

from fast_smt.types import H256


class Sha256Hasher:
    """Plain SHA-256."""

    def __init__(self) -> None:
        self._state = hashlib.sha256()

    def write_bytes(self, data: bytes) -> None:
        self._state.update(data)

    def finish(self) -> H256:
        return H256(self._state.digest())
