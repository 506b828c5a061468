"""Tests for leaf hashing and branch merging."""

from __future__ import annotations

from fast_smt.hashing import Blake2bHasher, digest
from fast_smt.merge import BRANCH_DOMAIN, LEAF_DOMAIN, hash_leaf, merge
from fast_smt.types import ZERO_HASH, H256, InternalKey, Uint8

A = H256(b"\x0a" * 32)
B = H256(b"\x0b" * 32)


class TestHashLeaf:
    """Tests for leaf digests."""

    def test_zero_value_is_zero_digest(self) -> None:
        """A leaf holding the zero value hashes to zero."""
        assert hash_leaf(Blake2bHasher, InternalKey(7), ZERO_HASH) == ZERO_HASH

    def test_layout(self) -> None:
        """Leaves hash their tag, key and value bytes."""
        key = InternalKey(7)
        expected = digest(Blake2bHasher, LEAF_DOMAIN, key.to_bytes(), bytes(A))
        assert hash_leaf(Blake2bHasher, key, A) == expected

    def test_key_is_bound(self) -> None:
        """The same value at two keys hashes differently."""
        assert hash_leaf(Blake2bHasher, InternalKey(1), A) != hash_leaf(
            Blake2bHasher, InternalKey(2), A
        )


class TestMerge:
    """Tests for branch digests."""

    def test_zero_children_collapse(self) -> None:
        """Two zero children merge to zero at any height."""
        for height in (0, 100, 255):
            assert merge(Blake2bHasher, height, InternalKey(0), ZERO_HASH, ZERO_HASH) == ZERO_HASH

    def test_one_zero_child_is_hashed(self) -> None:
        """A single non-zero child is enough to hash."""
        assert not merge(Blake2bHasher, 0, InternalKey(0), A, ZERO_HASH).is_zero()

    def test_layout(self) -> None:
        """Branches hash their tag, height, prefix and both children."""
        node_key = InternalKey(1 << 200)
        expected = digest(
            Blake2bHasher, BRANCH_DOMAIN, Uint8(3).to_bytes(), node_key.to_bytes(), A, B
        )
        assert merge(Blake2bHasher, 3, node_key, A, B) == expected

    def test_order_matters(self) -> None:
        """Swapping children changes the digest."""
        node_key = InternalKey(0)
        assert merge(Blake2bHasher, 0, node_key, A, B) != merge(Blake2bHasher, 0, node_key, B, A)

    def test_height_is_bound(self) -> None:
        """The same children at two heights hash differently."""
        node_key = InternalKey(0)
        assert merge(Blake2bHasher, 4, node_key, A, B) != merge(Blake2bHasher, 5, node_key, A, B)

    def test_position_is_bound(self) -> None:
        """The same children under two prefixes hash differently."""
        assert merge(Blake2bHasher, 4, InternalKey(0), A, B) != merge(
            Blake2bHasher, 4, InternalKey(1 << 10), A, B
        )

    def test_leaf_and_branch_domains_differ(self) -> None:
        """A branch digest never coincides with a leaf digest over the same bytes."""
        key = InternalKey(0)
        assert hash_leaf(Blake2bHasher, key, A) != merge(Blake2bHasher, 0, key, A, B)
        assert LEAF_DOMAIN != BRANCH_DOMAIN
