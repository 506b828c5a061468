"""
Compact multi-key proofs.

### Shape of a proof

A proof covers a set of keys. For each key, in ascending key order, it carries a
256-bit hint bitmap: bit `h` set means the sibling met at height `h` on that key's
path is the zero digest and was left out. All non-zero siblings of all paths live in
one shared sequence, `merkle_path`, in the order the verifier will consume them.

### Canonical order

Keys are processed in ascending order. Each key climbs from height 0 and stops just
below the height where it forks from the next key; the last key climbs to the root.
The partial digest a key reaches is pushed on a stack and becomes the sibling of the
next key when that key reaches the fork height. At each height the sibling is:

1. the digest on top of the stack, when the stack top forked at this height,
2. otherwise the zero digest, when the hint bit is set,
3. otherwise the next entry of `merkle_path`.

A proof has exactly one valid encoding: hint bits are set only where rule 2 applies,
and `merkle_path` never carries the zero digest. Anything else is malformed.

Siblings shared by several requested paths are thus never repeated: above the fork
they are reconstructed, not carried. Generation in `SparseMerkleTree.merkle_proof`
follows this exact order, and `compute_root` must consume `merkle_path` exactly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable

from pydantic import Field, model_validator

from fast_smt.constants import KEY_LIMIT, TREE_HEIGHT
from fast_smt.hashing import DEFAULT_HASHER, HasherFactory
from fast_smt.merge import hash_leaf, merge
from fast_smt.types import (
    ZERO_HASH,
    H256,
    InternalKey,
    InvalidInputError,
    MalformedProofError,
    StrictBaseModel,
    Uint256,
    Value,
)

if TYPE_CHECKING:
    from .compiled import CompiledMerkleProof

logger = logging.getLogger(__name__)

Leaves = Iterable[tuple[Any, Value]]
"""Claimed `(key, value)` pairs; the zero value claims exclusion."""


def normalize_leaves(leaves: Leaves) -> list[tuple[InternalKey, Value]]:
    """
    Convert claimed leaves to path keys, collapse duplicates and sort them.

    Raises:
        InvalidInputError: If no leaves are given.
        MalformedProofError: If one key is claimed with two different values.
        KeyOutOfRangeError: If a key is not a 32-byte value.
    """
    by_key: dict[InternalKey, Value] = {}
    for key, value in leaves:
        path = InternalKey.coerce(key)
        if path in by_key and by_key[path] != value:
            raise MalformedProofError(f"conflicting values claimed for key {path.to_h256().hex()}")
        by_key[path] = value

    if not by_key:
        raise InvalidInputError("At least one leaf is required")
    return sorted(by_key.items(), key=lambda pair: pair[0])


class MerkleProof(StrictBaseModel):
    """
    Sparse proof material for one or more keys.

    The proof is a self-contained value: it owns copies of its digests and holds no
    reference to the tree or store it came from.
    """

    leaves_bitmap: tuple[Uint256, ...] = Field(
        ..., description="Per-key zero-sibling hints, in ascending key order."
    )

    merkle_path: tuple[H256, ...] = Field(
        ..., description="Shared non-zero siblings, in consumption order."
    )

    @model_validator(mode="after")
    def check_bounds(self) -> MerkleProof:
        """Bitmap and sibling counts must fit the uint32 index space."""
        if len(self.leaves_bitmap) > KEY_LIMIT:
            raise ValueError(f"A proof cannot cover more than {KEY_LIMIT} keys.")
        if len(self.merkle_path) > TREE_HEIGHT * max(len(self.leaves_bitmap), 1):
            raise ValueError("The proof carries more siblings than its paths can consume.")
        return self

    @property
    def leaves_count(self) -> int:
        """Number of keys the proof covers."""
        return len(self.leaves_bitmap)

    def compute_root(self, leaves: Leaves, hasher: HasherFactory | None = None) -> H256:
        """
        Reconstruct the root implied by this proof and the claimed leaves.

        Args:
            leaves: `(key, value)` pairs, one per proven key, in any order.
            hasher: Backend the proof was generated with; defaults to the configured one.

        Returns:
            The reconstructed root digest.

        Raises:
            InvalidInputError: If `leaves` is empty.
            MalformedProofError: If the leaves do not match the bitmaps, a hint bit is
                set where no zero sibling is expected, or the sibling sequence runs
                short, carries a zero digest or is not fully consumed.
        """
        hasher = hasher or DEFAULT_HASHER
        pairs = normalize_leaves(leaves)
        if len(pairs) != len(self.leaves_bitmap):
            raise MalformedProofError(
                f"proof covers {len(self.leaves_bitmap)} keys but {len(pairs)} leaves were given"
            )

        cursor = 0
        # Partial digests waiting for their sibling path: (fork height, digest).
        stack: list[tuple[int, H256]] = []
        last = len(pairs) - 1

        for index, (key, value) in enumerate(pairs):
            hints = int(self.leaves_bitmap[index])
            top = key.fork_height(pairs[index + 1][0]) if index < last else TREE_HEIGHT
            current = hash_leaf(hasher, key, value)

            if hints >> top:
                raise MalformedProofError(f"hint bits set above fork height {top} of leaf {index}")

            for height in range(top):
                hinted = (hints >> height) & 1
                if stack and stack[-1][0] == height:
                    if hinted:
                        raise MalformedProofError(
                            f"hint bit set at shared height {height} of leaf {index}"
                        )
                    sibling = stack.pop()[1]
                elif hinted:
                    sibling = ZERO_HASH
                else:
                    if cursor >= len(self.merkle_path):
                        raise MalformedProofError(
                            f"sibling sequence exhausted at height {height} of leaf {index}"
                        )
                    sibling = self.merkle_path[cursor]
                    if sibling.is_zero():
                        raise MalformedProofError(
                            f"zero sibling carried at height {height} of leaf {index}"
                        )
                    cursor += 1

                if key.is_right(height):
                    current = merge(hasher, height, key.parent_path(height), sibling, current)
                else:
                    current = merge(hasher, height, key.parent_path(height), current, sibling)

            stack.append((top, current))

        if len(stack) != 1:
            raise MalformedProofError(f"{len(stack)} partial roots left after reconstruction")
        if cursor != len(self.merkle_path):
            raise MalformedProofError(
                f"{len(self.merkle_path) - cursor} unused siblings left after reconstruction"
            )
        return stack[0][1]

    def verify(self, root: H256, leaves: Leaves, hasher: HasherFactory | None = None) -> bool:
        """
        Check that the claimed leaves are exactly what `root` commits to.

        Structural defects raise `MalformedProofError`; a well-formed proof that simply
        does not match `root` returns False.
        """
        computed = self.compute_root(leaves, hasher)
        if computed != root:
            logger.debug("Proof reconstructs %s, expected %s", computed.hex(), bytes(root).hex())
            return False
        return True

    def compile(self) -> CompiledMerkleProof:
        """Pack the proof into its flat byte layout."""
        from .compiled import CompiledMerkleProof

        return CompiledMerkleProof.from_proof(self)
