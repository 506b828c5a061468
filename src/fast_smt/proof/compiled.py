"""
Byte-packed proof encoding.

Layout (all integers little-endian)::

    offset  size             field
    0       4                leaves_count   (uint32)
    4       4                siblings_count (uint32)
    8       32 * leaves      hint bitmaps, one uint256 per key, ascending key order
    ...     32 * siblings    sibling digests, in consumption order

The encoding is a pure change of representation: `decompile()` yields a `MerkleProof`
equal to the one that was compiled.
"""

from __future__ import annotations

from typing import Final

from pydantic import Field
from typing_extensions import Self

from fast_smt.constants import BYTES_PER_DIGEST
from fast_smt.hashing import HasherFactory
from fast_smt.types import H256, MalformedProofError, StrictBaseModel, Uint32, Uint256

from .proof import Leaves, MerkleProof

COUNT_SIZE: Final = Uint32.BITS // 8
"""Width of each header count."""

HEADER_SIZE: Final = 2 * COUNT_SIZE
"""Width of the header."""


class CompiledMerkleProof(StrictBaseModel):
    """A `MerkleProof` packed into a flat byte buffer."""

    data: bytes = Field(..., description="The packed proof bytes.")

    @classmethod
    def from_proof(cls, proof: MerkleProof) -> Self:
        """Pack `proof`."""
        parts = [
            Uint32(len(proof.leaves_bitmap)).encode_bytes(),
            Uint32(len(proof.merkle_path)).encode_bytes(),
        ]
        parts.extend(bitmap.encode_bytes() for bitmap in proof.leaves_bitmap)
        parts.extend(bytes(sibling) for sibling in proof.merkle_path)
        return cls(data=b"".join(parts))

    def decompile(self) -> MerkleProof:
        """
        Unpack into a `MerkleProof`.

        Raises:
            MalformedProofError: If the buffer is truncated, oversized or covers no keys.
        """
        data = self.data
        if len(data) < HEADER_SIZE:
            raise MalformedProofError(
                f"header needs {HEADER_SIZE} bytes, got {len(data)}", offset=len(data)
            )

        leaves_count = int(Uint32.decode_bytes(data[:COUNT_SIZE]))
        siblings_count = int(Uint32.decode_bytes(data[COUNT_SIZE:HEADER_SIZE]))
        if leaves_count == 0:
            raise MalformedProofError("proof covers no keys", offset=0)

        expected = HEADER_SIZE + BYTES_PER_DIGEST * (leaves_count + siblings_count)
        if len(data) != expected:
            raise MalformedProofError(
                f"expected {expected} bytes for {leaves_count} keys and "
                f"{siblings_count} siblings, got {len(data)}",
                offset=min(len(data), expected),
            )

        siblings_start = HEADER_SIZE + BYTES_PER_DIGEST * leaves_count
        bitmaps = tuple(
            Uint256.decode_bytes(data[offset : offset + BYTES_PER_DIGEST])
            for offset in range(HEADER_SIZE, siblings_start, BYTES_PER_DIGEST)
        )
        siblings = tuple(
            H256(data[offset : offset + BYTES_PER_DIGEST])
            for offset in range(siblings_start, expected, BYTES_PER_DIGEST)
        )

        try:
            return MerkleProof(leaves_bitmap=bitmaps, merkle_path=siblings)
        except ValueError as e:
            raise MalformedProofError(str(e)) from e

    def compute_root(self, leaves: Leaves, hasher: HasherFactory | None = None) -> H256:
        """Decompile, then reconstruct the root (see `MerkleProof.compute_root`)."""
        return self.decompile().compute_root(leaves, hasher)

    def verify(self, root: H256, leaves: Leaves, hasher: HasherFactory | None = None) -> bool:
        """Decompile, then verify (see `MerkleProof.verify`)."""
        return self.decompile().verify(root, leaves, hasher)

    def __bytes__(self) -> bytes:
        """Return the packed bytes."""
        return self.data

    def __len__(self) -> int:
        """Return the packed size in bytes."""
        return len(self.data)

    def hex(self) -> str:
        """Return the hexadecimal string representation of the packed bytes."""
        return self.data.hex()
