"""
Leaf hashing and branch merging with domain separation.

### Why bind position into every hash

A Merkle proof only convinces a verifier if a digest can be interpreted in exactly one
place. If a branch hash were `H(left || right)`, an attacker could lift a subtree out of
its position and present it as a subtree somewhere else, or pass a branch off as a leaf.

Every digest therefore commits to its context:

- leaves hash `LEAF_DOMAIN || key || value bytes`,
- branches hash `BRANCH_DOMAIN || height || path prefix || left || right`.

The different leading tags keep leaves and branches apart; the height and prefix pin a
branch to a single node position.

### Zero collapse

A branch whose children are both the zero digest is itself the zero digest, and a leaf
holding the zero value is the zero digest. No hashing happens in either case. This is
what lets an all-empty subtree of any height cost nothing to represent.
"""

from __future__ import annotations

from typing import Final

from fast_smt.hashing import HasherFactory, digest
from fast_smt.types import ZERO_HASH, H256, InternalKey, Uint8, Value, is_zero_value

LEAF_DOMAIN: Final = b"\x00"
"""Leading tag of every leaf hash."""

BRANCH_DOMAIN: Final = b"\x01"
"""Leading tag of every branch hash."""


def hash_leaf(hasher: HasherFactory, key: InternalKey, value: Value) -> H256:
    """
    Digest of the leaf storing `value` at `key`.

    Returns the zero digest when `value` is its type's zero instance.
    """
    if is_zero_value(value):
        return ZERO_HASH
    return digest(hasher, LEAF_DOMAIN, key.to_bytes(), value.as_bytes())


def merge(
    hasher: HasherFactory,
    height: int,
    node_key: InternalKey,
    lhs: H256,
    rhs: H256,
) -> H256:
    """
    Digest of the branch at `height` whose path prefix is `node_key`.

    Args:
        hasher: Backend used for the hash.
        height: Height of the branch (0 for the parents of leaves, 255 for the root).
        node_key: The branch's path prefix, `key.parent_path(height)`.
        lhs: Digest of the left child.
        rhs: Digest of the right child.

    Returns:
        The zero digest when both children are zero, otherwise the domain-separated hash.
    """
    if lhs.is_zero() and rhs.is_zero():
        return ZERO_HASH
    return digest(
        hasher,
        BRANCH_DOMAIN,
        Uint8(height).to_bytes(),
        node_key.to_bytes(),
        lhs,
        rhs,
    )
