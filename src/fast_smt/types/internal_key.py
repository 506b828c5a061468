"""
The 256-bit path key.

A leaf's position in the tree is the integer value of its 32-byte key read
little-endian. Bit `i` of that integer picks the child taken at branch height `i`:
0 descends left, 1 descends right. The root branch sits at height 255, so the most
significant bit decides the first step and bit 0 decides between two sibling leaves.

Ordering keys as plain integers therefore orders leaves left to right, which is the
canonical order proof generation and verification agree on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from typing_extensions import Self

from fast_smt.constants import BYTES_PER_DIGEST, MAX_HEIGHT

from .byte_arrays import H256
from .exceptions import KeyOutOfRangeError
from .uint import Uint256

if TYPE_CHECKING:
    from fast_smt.hashing import HasherFactory


class InternalKey(Uint256):
    """A traversal address in the 256-level tree."""

    @classmethod
    def from_h256(cls, key: H256) -> Self:
        """Interpret a 32-byte key as a path."""
        return cls(int.from_bytes(key, "little"))

    @classmethod
    def from_domain_key(cls, data: bytes, hasher: HasherFactory) -> Self:
        """Derive a path by hashing an arbitrary domain key."""
        h = hasher()
        h.write_bytes(data)
        return cls.from_h256(h.finish())

    @classmethod
    def coerce(cls, key: Any) -> Self:
        """
        Accept an `InternalKey`, an `H256` or any 32-byte `bytes`.

        Raises:
            KeyOutOfRangeError: If `key` cannot be placed in the path space.
        """
        if isinstance(key, cls):
            return key
        if isinstance(key, (bytes, bytearray)):
            if len(key) != BYTES_PER_DIGEST:
                raise KeyOutOfRangeError(
                    f"Key must be exactly {BYTES_PER_DIGEST} bytes",
                    limit=BYTES_PER_DIGEST,
                    actual=len(key),
                )
            return cls(int.from_bytes(key, "little"))
        raise KeyOutOfRangeError(f"Unsupported key type {type(key).__name__}")

    def to_h256(self) -> H256:
        """The 32-byte form of this path."""
        return H256(self.to_bytes())

    def get_bit(self, i: int) -> bool:
        """Bit `i`, where bit 0 is the least significant."""
        return bool((int(self) >> i) & 1)

    def is_right(self, height: int) -> bool:
        """Whether the path descends right below the branch at `height`."""
        return self.get_bit(height)

    def parent_path(self, height: int) -> Self:
        """
        The path prefix identifying the branch at `height` that contains this key.

        Clears bits `0..=height`, keeping only the bits that locate the branch.
        """
        shift = height + 1
        return type(self)((int(self) >> shift) << shift)

    def child(self, height: int, is_right: bool) -> Self:
        """
        The prefix of the left or right child of the branch at `height`.

        `self` must be that branch's prefix. At height 0 the result is a full leaf key.
        """
        return type(self)(int(self) | (1 << height)) if is_right else self

    def fork_height(self, other: InternalKey) -> int:
        """
        The height of the lowest branch shared by both paths.

        That is the highest bit in which the two keys differ; equal keys fork at 0.
        """
        diff = int(self) ^ int(other)
        if diff == 0:
            return 0
        height = diff.bit_length() - 1
        assert height <= MAX_HEIGHT
        return height
