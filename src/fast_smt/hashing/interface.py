"""
The incremental hashing capability consumed by the tree.

The tree never names a hash algorithm. It is handed a hasher *class*, instantiates
a fresh hasher for every digest it computes, feeds it bytes and finalizes it to a
32-byte `H256`. Any class with this shape is a drop-in backend.

Two trees built with different backends produce different roots over the same
updates, and a proof generated by one never verifies under the other.
"""

from __future__ import annotations

from typing import Protocol

from fast_smt.types import H256


class Hasher(Protocol):
    """An incremental 256-bit hash function."""

    def write_bytes(self, data: bytes) -> None:
        """Accumulate `data` into the running hash state."""
        ...

    def finish(self) -> H256:
        """Finalize and return the 32-byte digest."""
        ...


class HasherFactory(Protocol):
    """A zero-argument constructor of fresh hashers (usually the hasher class)."""

    def __call__(self) -> Hasher: ...


def digest(hasher: HasherFactory, *chunks: bytes) -> H256:
    """Hash the concatenation of `chunks` with a fresh hasher."""
    h = hasher()
    for chunk in chunks:
        h.write_bytes(bytes(chunk))
    return h.finish()
