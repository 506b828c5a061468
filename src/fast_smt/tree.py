"""
The sparse Merkle tree engine.

### Sparse representation

The tree is conceptually complete: 2^256 leaves under 256 levels of branches. Almost
every leaf holds the zero value, and almost every subtree is empty. Only non-zero
nodes are persisted:

- a leaf is stored under its full path only while its value is non-zero,
- the branch at height `h` on a key's path is stored under `(h, key.parent_path(h))`
  only while at least one of its children is non-zero.

A missing store entry *is* the zero node. Nothing is ever materialized for an empty
subtree, whatever its height.

### Update

An update writes the leaf, then climbs heights 0..255. At each height it reads the
stored branch (or assumes zero), swaps in the new child digest on the key's side,
persists or removes the branch, and merges upward. The final merge is the new root.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from fast_smt.constants import KEY_LIMIT, MAX_HEIGHT, TREE_HEIGHT
from fast_smt.hashing import DEFAULT_HASHER, HasherFactory
from fast_smt.merge import hash_leaf, merge
from fast_smt.proof import MerkleProof
from fast_smt.storage import BranchKey, BranchNode, DefaultStore, LeafNode, Store
from fast_smt.types import (
    ZERO_HASH,
    H256,
    InternalKey,
    InvalidInputError,
    KeyOutOfRangeError,
    SMTError,
    Uint256,
    Value,
    is_zero_value,
)

logger = logging.getLogger(__name__)


class SparseMerkleTree:
    """
    A fixed-depth authenticated key-value map over 256-bit keys.

    The tree owns its root digest and a handle to its store. It is a synchronous,
    single-writer structure: concurrent `update` calls on one store must be serialized
    by the caller. Proofs it produces hold no reference back to it.
    """

    def __init__(
        self,
        hasher: HasherFactory | None = None,
        store: Store | None = None,
        value_type: type = H256,
        root: H256 | None = None,
        key_limit: int = KEY_LIMIT,
    ) -> None:
        """
        Create a tree, or reopen one over an existing store.

        Args:
            hasher: Hash backend; defaults to the configured one.
            store: Node store; defaults to a fresh in-memory `DefaultStore`.
            value_type: Class of stored values; provides the zero instance.
            root: Root of the nodes already in `store`, when reopening a tree.
            key_limit: Maximum number of distinct non-zero leaves.
        """
        self.hasher: HasherFactory = hasher or DEFAULT_HASHER
        self._store: Store = store if store is not None else DefaultStore()
        self.value_type = value_type
        self._root: H256 = H256(root) if root is not None else ZERO_HASH
        self.key_limit = key_limit

    @property
    def root(self) -> H256:
        """The current root digest."""
        return self._root

    @property
    def store(self) -> Store:
        """The node store this tree writes through."""
        return self._store

    def is_empty(self) -> bool:
        """Whether the tree holds no non-zero leaf."""
        return self._root.is_zero()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get(self, key: Any) -> Value:
        """
        Read the value stored at `key`.

        Returns the value type's zero instance for keys that were never written or
        were deleted.

        Raises:
            KeyOutOfRangeError: If `key` is not a 32-byte key.
            StorageFailureError: If the store fails.
        """
        path = InternalKey.coerce(key)
        if self.is_empty():
            return self.value_type.zero()

        # Any missing branch on the way down means the whole subtree is empty.
        for height in range(MAX_HEIGHT, -1, -1):
            branch_key = BranchKey(height=height, node_key=path.parent_path(height))
            if self._store.get_branch(branch_key) is None:
                return self.value_type.zero()

        leaf = self._store.get_leaf(path)
        return leaf.value if leaf is not None else self.value_type.zero()

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def update(self, key: Any, value: Value) -> H256:
        """
        Set the value at `key`; the zero value deletes it.

        Args:
            key: 32-byte key.
            value: New value, an instance of the tree's value type.

        Returns:
            The new root.

        Raises:
            KeyOutOfRangeError: If `key` is invalid or a new leaf would exceed the
                leaf-count ceiling.
            StorageFailureError: If the store fails.
        """
        path = InternalKey.coerce(key)
        node = hash_leaf(self.hasher, path, value)
        deleting = is_zero_value(value)

        if not deleting and self._store.get_leaf(path) is None:
            count = self._store.leaf_count()
            if count >= self.key_limit:
                raise KeyOutOfRangeError("Too many leaves", limit=self.key_limit, actual=count + 1)

        # Recompute the path bottom-up, replacing our side of each branch. Nothing is
        # written until every branch on the path has been read and rehashed.
        writes: list[tuple[BranchKey, BranchNode | None]] = []
        for height in range(TREE_HEIGHT):
            node_key = path.parent_path(height)
            branch_key = BranchKey(height=height, node_key=node_key)
            stored = self._store.get_branch(branch_key)
            sibling = stored.sibling(path.is_right(height)) if stored is not None else ZERO_HASH

            if path.is_right(height):
                left, right = sibling, node
            else:
                left, right = node, sibling

            branch = BranchNode(left=left, right=right)
            writes.append((branch_key, None if branch.is_zero() else branch))
            node = merge(self.hasher, height, node_key, left, right)

        with self._store.batch():
            if deleting:
                self._store.remove_leaf(path)
            else:
                self._store.insert_leaf(path, LeafNode(key=path, value=value))
            for branch_key, branch in writes:
                if branch is None:
                    self._store.remove_branch(branch_key)
                else:
                    self._store.insert_branch(branch_key, branch)

        self._root = node
        logger.debug("Updated key %s, root is now %s", path.to_h256().hex(), node.hex())
        return self._root

    def update_all(self, leaves: Iterable[tuple[Any, Value]]) -> H256:
        """
        Apply `update` to each `(key, value)` pair in order.

        Returns:
            The root after the last update.
        """
        count = 0
        for key, value in leaves:
            self.update(key, value)
            count += 1
        logger.debug("Applied %d updates", count)
        return self._root

    # -------------------------------------------------------------------------
    # Proofs
    # -------------------------------------------------------------------------

    def merkle_proof(self, keys: Iterable[Any]) -> MerkleProof:
        """
        Build a proof covering `keys` against the current root.

        Keys that hold the zero value yield exclusion proofs. Duplicates collapse.

        Raises:
            InvalidInputError: If `keys` is empty.
            KeyOutOfRangeError: If a key is invalid or there are more keys than
                the leaf-count ceiling.
            StorageFailureError: If the store fails.
        """
        paths = sorted({InternalKey.coerce(key) for key in keys})
        if not paths:
            raise InvalidInputError("At least one key is required to build a proof")
        if len(paths) > self.key_limit:
            raise KeyOutOfRangeError(
                "Too many keys for one proof", limit=self.key_limit, actual=len(paths)
            )

        # First pass: the sibling at every height of every path.
        siblings: list[list[H256]] = []
        for path in paths:
            path_siblings: list[H256] = []
            for height in range(TREE_HEIGHT):
                branch_key = BranchKey(height=height, node_key=path.parent_path(height))
                stored = self._store.get_branch(branch_key)
                path_siblings.append(
                    stored.sibling(path.is_right(height)) if stored is not None else ZERO_HASH
                )
            siblings.append(path_siblings)

        # Second pass: walk heights in the order verification does. Siblings taken from
        # the fork stack get no hint bit; the rest become a hint bit or a path entry.
        bitmaps: list[Uint256] = []
        merkle_path: list[H256] = []
        pending_forks: list[int] = []
        last = len(paths) - 1
        for index, path in enumerate(paths):
            top = path.fork_height(paths[index + 1]) if index < last else TREE_HEIGHT
            hints = 0
            for height in range(top):
                if pending_forks and pending_forks[-1] == height:
                    pending_forks.pop()
                elif siblings[index][height].is_zero():
                    hints |= 1 << height
                else:
                    merkle_path.append(siblings[index][height])
            bitmaps.append(Uint256(hints))
            pending_forks.append(top)

        logger.debug(
            "Built proof for %d keys with %d siblings", len(paths), len(merkle_path)
        )
        return MerkleProof(leaves_bitmap=tuple(bitmaps), merkle_path=tuple(merkle_path))

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def validate(self) -> bool:
        """
        Check the whole store against the root.

        Re-walks every non-zero node reachable from the root and verifies:

        - each branch's digest matches what its parent expects,
        - no persisted branch has two zero children,
        - each leaf's digest matches the digest its branch stores,
        - no persisted node is unreachable (reached counts equal store counts).

        The cost is proportional to the number of stored nodes. Never raises: a store
        failure is logged and reported as False.
        """
        try:
            return self._validate()
        except SMTError as e:
            logger.warning("Validation aborted: %s", e)
            return False

    def _validate(self) -> bool:
        if self._root.is_zero():
            return self._store.branch_count() == 0 and self._store.leaf_count() == 0

        branches_seen = 0
        leaves_seen = 0
        pending: list[tuple[int, InternalKey, H256]] = [(MAX_HEIGHT, InternalKey(0), self._root)]

        while pending:
            height, node_key, expected = pending.pop()
            branch = self._store.get_branch(BranchKey(height=height, node_key=node_key))
            if branch is None:
                logger.warning("Missing branch at height %d", height)
                return False
            if branch.is_zero():
                logger.warning("Persisted zero branch at height %d", height)
                return False
            if merge(self.hasher, height, node_key, branch.left, branch.right) != expected:
                logger.warning("Branch digest mismatch at height %d", height)
                return False
            branches_seen += 1

            for is_right, child in ((False, branch.left), (True, branch.right)):
                if child.is_zero():
                    continue
                child_key = node_key.child(height, is_right)
                if height > 0:
                    pending.append((height - 1, child_key, child))
                    continue
                leaf = self._store.get_leaf(child_key)
                if leaf is None or hash_leaf(self.hasher, child_key, leaf.value) != child:
                    logger.warning("Leaf mismatch at key %s", child_key.to_h256().hex())
                    return False
                leaves_seen += 1

        if branches_seen != self._store.branch_count():
            logger.warning("Store holds unreachable branches")
            return False
        if leaves_seen != self._store.leaf_count():
            logger.warning("Store holds unreachable leaves")
            return False
        return True
