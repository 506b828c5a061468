"""In-memory store backed by two dictionaries."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from fast_smt.types import InternalKey

from .nodes import BranchKey, BranchNode, LeafNode


class DefaultStore:
    """
    The default store of a tree.

    Holds branches and leaves in plain dicts keyed by position. Nothing here can
    fail with an I/O error.

    Sharing one instance between trees shares their nodes; callers doing so must
    serialize writes themselves.
    """

    def __init__(self) -> None:
        self.branches_map: dict[BranchKey, BranchNode] = {}
        self.leaves_map: dict[InternalKey, LeafNode] = {}

    @contextmanager
    def batch(self) -> Iterator[None]:
        # Dict writes cannot fail, so there is nothing to roll back.
        yield

    def get_branch(self, branch_key: BranchKey) -> BranchNode | None:
        return self.branches_map.get(branch_key)

    def insert_branch(self, branch_key: BranchKey, branch: BranchNode) -> None:
        self.branches_map[branch_key] = branch

    def remove_branch(self, branch_key: BranchKey) -> None:
        self.branches_map.pop(branch_key, None)

    def branch_count(self) -> int:
        return len(self.branches_map)

    def get_leaf(self, key: InternalKey) -> LeafNode | None:
        return self.leaves_map.get(key)

    def insert_leaf(self, key: InternalKey, leaf: LeafNode) -> None:
        self.leaves_map[key] = leaf

    def remove_leaf(self, key: InternalKey) -> None:
        self.leaves_map.pop(key, None)

    def leaf_count(self) -> int:
        return len(self.leaves_map)

