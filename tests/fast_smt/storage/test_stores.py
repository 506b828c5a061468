"""Tests shared by every store implementation."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from fast_smt.storage import BranchKey, BranchNode, DefaultStore, LeafNode, SQLiteStore, Store
from fast_smt.types import ZERO_HASH, H256, InternalKey

A = H256(b"\x0a" * 32)
B = H256(b"\x0b" * 32)


@pytest.fixture(params=["memory", "sqlite"])
def store(request: pytest.FixtureRequest) -> Generator[Store, None, None]:
    """Each store implementation, empty."""
    if request.param == "memory":
        yield DefaultStore()
        return
    sqlite_store = SQLiteStore(":memory:")
    yield sqlite_store
    sqlite_store.close()


class TestBranchOperations:
    """Tests for branch storage."""

    def test_missing_branch_is_none(self, store: Store) -> None:
        """An absent branch is reported as None."""
        assert store.get_branch(BranchKey(height=0, node_key=InternalKey(0))) is None

    def test_insert_and_get(self, store: Store) -> None:
        """A branch can be stored and read back."""
        branch_key = BranchKey(height=7, node_key=InternalKey(1 << 8))
        store.insert_branch(branch_key, BranchNode(left=A, right=ZERO_HASH))

        assert store.get_branch(branch_key) == BranchNode(left=A, right=ZERO_HASH)
        assert store.branch_count() == 1

    def test_insert_overwrites(self, store: Store) -> None:
        """Rewriting a position replaces the branch."""
        branch_key = BranchKey(height=7, node_key=InternalKey(0))
        store.insert_branch(branch_key, BranchNode(left=A, right=ZERO_HASH))
        store.insert_branch(branch_key, BranchNode(left=A, right=B))

        assert store.get_branch(branch_key) == BranchNode(left=A, right=B)
        assert store.branch_count() == 1

    def test_positions_are_distinct(self, store: Store) -> None:
        """Same prefix at another height is a different entry."""
        store.insert_branch(
            BranchKey(height=1, node_key=InternalKey(0)), BranchNode(left=A, right=B)
        )
        assert store.get_branch(BranchKey(height=2, node_key=InternalKey(0))) is None

    def test_remove(self, store: Store) -> None:
        """Removing a branch makes it absent; removing again is a no-op."""
        branch_key = BranchKey(height=0, node_key=InternalKey(0))
        store.insert_branch(branch_key, BranchNode(left=A, right=B))

        store.remove_branch(branch_key)
        store.remove_branch(branch_key)

        assert store.get_branch(branch_key) is None
        assert store.branch_count() == 0


class TestLeafOperations:
    """Tests for leaf storage."""

    def test_missing_leaf_is_none(self, store: Store) -> None:
        """An absent leaf is reported as None."""
        assert store.get_leaf(InternalKey(3)) is None

    def test_insert_and_get(self, store: Store) -> None:
        """A leaf can be stored and read back with its value type intact."""
        key = InternalKey(3)
        store.insert_leaf(key, LeafNode(key=key, value=A))

        leaf = store.get_leaf(key)
        assert leaf is not None
        assert leaf.key == key
        assert isinstance(leaf.value, H256)
        assert leaf.value == A
        assert store.leaf_count() == 1

    def test_remove(self, store: Store) -> None:
        """Removing a leaf makes it absent; removing again is a no-op."""
        key = InternalKey(3)
        store.insert_leaf(key, LeafNode(key=key, value=A))

        store.remove_leaf(key)
        store.remove_leaf(key)

        assert store.get_leaf(key) is None
        assert store.leaf_count() == 0


def test_batch_writes_visible_after_exit(store: Store) -> None:
    """Writes grouped in a batch are all readable once it exits."""
    branch_key = BranchKey(height=1, node_key=InternalKey(0))
    with store.batch():
        store.insert_branch(branch_key, BranchNode(left=A, right=B))
        store.insert_leaf(InternalKey(2), LeafNode(key=InternalKey(2), value=B))

    assert store.get_branch(branch_key) == BranchNode(left=A, right=B)
    assert store.leaf_count() == 1
