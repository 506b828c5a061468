"""
Abstract store interface for tree nodes.

Defines the Protocol that all store implementations must follow.
Uses structural subtyping for flexibility.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from fast_smt.types import InternalKey

from .nodes import BranchKey, BranchNode, LeafNode


class Store(Protocol):
    """
    Protocol for sparse node storage.

    All store implementations must provide these methods.
    Uses structural subtyping - any class with matching methods satisfies the protocol.

    Storage Contract
    ----------------
    - Only non-zero nodes are ever written.
    - Absence of an entry means the zero node. Lookups return None, never raise.
    - Entries are keyed by position, so rewriting a node replaces it in place.
    - Removing an absent entry is a no-op.
    - Genuine I/O problems raise `StorageFailureError`.
    - Writes made inside `batch()` become visible together or not at all.
    """

    def batch(self) -> AbstractContextManager[None]:
        """
        Group the writes made inside the block into one atomic unit.

        Returns:
            A context manager. On normal exit every write is kept; if the block
            raises, none of them is.
        """
        ...

    # -------------------------------------------------------------------------
    # Branch Operations
    # -------------------------------------------------------------------------

    def get_branch(self, branch_key: BranchKey) -> BranchNode | None:
        """
        Retrieve the branch at a position.

        Args:
            branch_key: Height and path prefix of the branch.

        Returns:
            The branch if persisted, None if it is the zero node.
        """
        ...

    def insert_branch(self, branch_key: BranchKey, branch: BranchNode) -> None:
        """
        Store or overwrite the branch at a position.

        Args:
            branch_key: Height and path prefix of the branch.
            branch: Non-zero branch content.
        """
        ...

    def remove_branch(self, branch_key: BranchKey) -> None:
        """
        Delete the branch at a position, if present.

        Args:
            branch_key: Height and path prefix of the branch.
        """
        ...

    def branch_count(self) -> int:
        """
        Number of persisted branches.

        Returns:
            Count of branch entries.
        """
        ...

    # -------------------------------------------------------------------------
    # Leaf Operations
    # -------------------------------------------------------------------------

    def get_leaf(self, key: InternalKey) -> LeafNode | None:
        """
        Retrieve the leaf stored at a key.

        Args:
            key: Full 256-bit path of the leaf.

        Returns:
            The leaf if persisted, None if the key holds the zero value.
        """
        ...

    def insert_leaf(self, key: InternalKey, leaf: LeafNode) -> None:
        """
        Store or overwrite the leaf at a key.

        Args:
            key: Full 256-bit path of the leaf.
            leaf: Leaf holding a non-zero value.
        """
        ...

    def remove_leaf(self, key: InternalKey) -> None:
        """
        Delete the leaf at a key, if present.

        Args:
            key: Full 256-bit path of the leaf.
        """
        ...

    def leaf_count(self) -> int:
        """
        Number of persisted leaves.

        Returns:
            Count of leaf entries.
        """
        ...
