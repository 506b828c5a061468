"""BLAKE2b-256 backend."""

from __future__ import annotations

import hashlib
from typing import Final

from fast_smt.constants import BYTES_PER_DIGEST
from fast_smt.types import H256

BLAKE2B_PERSONALIZATION: Final = b"sparsemerkletree"
"""Written into every fresh hasher before any caller input."""


class Blake2bHasher:
    """BLAKE2b truncated to a 32-byte digest, seeded with a personalization string."""

    def __init__(self) -> None:
        self._state = hashlib.blake2b(digest_size=BYTES_PER_DIGEST)
        self._state.update(BLAKE2B_PERSONALIZATION)

    def write_bytes(self, data: bytes) -> None:
        self._state.update(data)

    def finish(self) -> H256:
        return H256(self._state.digest())
