"""
SQLite store implementation for tree nodes.

This module provides persistent storage for a sparse Merkle tree:

- Branches indexed by (height, path prefix)
- Leaves indexed by their full path

Only non-zero nodes are ever written, so the database holds at most 256 branches per
stored leaf regardless of the size of the key space. Reopening a tree over an existing
database only requires the root digest that was current when it was last written.
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from fast_smt.types import H256, InternalKey, StorageFailureError

from .namespaces import ALL_NAMESPACES, BRANCHES, LEAVES
from .nodes import BranchKey, BranchNode, LeafNode

logger = logging.getLogger(__name__)


class SQLiteStore:
    """
    SQLite implementation of the Store protocol.

    Stores tree nodes in a single SQLite file.
    Thread-safe through SQLite's built-in locking, but the tree itself still
    assumes a single writer.

    Values are stored in the value type's byte encoding and decoded on read, so
    the value type must provide `encode_bytes()` and `decode_bytes()`.
    """

    def __init__(self, path: Path | str, value_type: type = H256) -> None:
        """
        Initialize SQLite store.

        Creates database file and tables if they don't exist.

        Args:
            path: Path to SQLite database file.
                  Use ":memory:" for in-memory database.
            value_type: Class used to decode stored leaf values.

        Raises:
            StorageFailureError: If the database cannot be opened or initialized.
        """
        self._path = Path(path) if isinstance(path, str) else path
        self._value_type = value_type
        self._in_batch = False

        with self._guard("open"):
            # The check_same_thread=False flag allows multiple threads to share
            # this connection. SQLite serializes writes internally.
            self._conn = sqlite3.connect(
                str(self._path),
                check_same_thread=False,
            )
            self._conn.row_factory = sqlite3.Row
            self._init_schema()

    def _init_schema(self) -> None:
        """Create tables if they don't exist."""
        cursor = self._conn.cursor()
        for namespace in ALL_NAMESPACES:
            cursor.execute(namespace.CREATE_TABLE)
        self._conn.commit()

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        """Translate driver errors and undecodable rows into `StorageFailureError`."""
        try:
            yield
        except (sqlite3.Error, ValueError) as e:
            logger.error("SQLite %s failed on %s: %s", operation, self._path, e)
            raise StorageFailureError(operation, backend=type(self).__name__) from e

    def _commit(self) -> None:
        """Commit now, unless a batch will commit for us."""
        if not self._in_batch:
            self._conn.commit()

    @contextmanager
    def batch(self) -> Iterator[None]:
        """
        Group writes into one transaction.

        Everything written inside the block is committed together when it exits,
        or rolled back if it raises. Nested batches join the outer one.
        """
        if self._in_batch:
            yield
            return

        self._in_batch = True
        try:
            yield
        except BaseException:
            with self._guard("rollback"):
                self._conn.rollback()
            raise
        else:
            with self._guard("commit"):
                self._conn.commit()
        finally:
            self._in_batch = False

    # -------------------------------------------------------------------------
    # Branch Operations
    # -------------------------------------------------------------------------

    def get_branch(self, branch_key: BranchKey) -> BranchNode | None:
        """Retrieve the branch at a position."""
        with self._guard("get_branch"):
            cursor = self._conn.cursor()
            cursor.execute(
                f"""
                SELECT left_digest, right_digest FROM {BRANCHES.TABLE_NAME}
                WHERE height = ? AND node_key = ?
                """,
                (branch_key.height, branch_key.node_key.to_bytes()),
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return BranchNode(left=H256(row["left_digest"]), right=H256(row["right_digest"]))

    def insert_branch(self, branch_key: BranchKey, branch: BranchNode) -> None:
        """Store or overwrite the branch at a position."""
        with self._guard("insert_branch"):
            cursor = self._conn.cursor()

            # INSERT OR REPLACE rewrites the node in place when a subtree changes.
            cursor.execute(
                f"""
                INSERT OR REPLACE INTO {BRANCHES.TABLE_NAME}
                    (height, node_key, left_digest, right_digest)
                VALUES (?, ?, ?, ?)
                """,
                (
                    branch_key.height,
                    branch_key.node_key.to_bytes(),
                    bytes(branch.left),
                    bytes(branch.right),
                ),
            )
            self._commit()

    def remove_branch(self, branch_key: BranchKey) -> None:
        """Delete the branch at a position, if present."""
        with self._guard("remove_branch"):
            cursor = self._conn.cursor()
            cursor.execute(
                f"DELETE FROM {BRANCHES.TABLE_NAME} WHERE height = ? AND node_key = ?",
                (branch_key.height, branch_key.node_key.to_bytes()),
            )
            self._commit()

    def branch_count(self) -> int:
        """Number of persisted branches."""
        with self._guard("branch_count"):
            cursor = self._conn.cursor()
            cursor.execute(f"SELECT COUNT(*) FROM {BRANCHES.TABLE_NAME}")
            return int(cursor.fetchone()[0])

    # -------------------------------------------------------------------------
    # Leaf Operations
    # -------------------------------------------------------------------------

    def get_leaf(self, key: InternalKey) -> LeafNode | None:
        """Retrieve the leaf stored at a key."""
        with self._guard("get_leaf"):
            cursor = self._conn.cursor()
            cursor.execute(
                f"SELECT value FROM {LEAVES.TABLE_NAME} WHERE key = ?",
                (key.to_bytes(),),
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return LeafNode(key=key, value=self._value_type.decode_bytes(row["value"]))

    def insert_leaf(self, key: InternalKey, leaf: LeafNode) -> None:
        """Store or overwrite the leaf at a key."""
        with self._guard("insert_leaf"):
            cursor = self._conn.cursor()
            cursor.execute(
                f"INSERT OR REPLACE INTO {LEAVES.TABLE_NAME} (key, value) VALUES (?, ?)",
                (key.to_bytes(), leaf.value.encode_bytes()),
            )
            self._commit()

    def remove_leaf(self, key: InternalKey) -> None:
        """Delete the leaf at a key, if present."""
        with self._guard("remove_leaf"):
            cursor = self._conn.cursor()
            cursor.execute(
                f"DELETE FROM {LEAVES.TABLE_NAME} WHERE key = ?",
                (key.to_bytes(),),
            )
            self._commit()

    def leaf_count(self) -> int:
        """Number of persisted leaves."""
        with self._guard("leaf_count"):
            cursor = self._conn.cursor()
            cursor.execute(f"SELECT COUNT(*) FROM {LEAVES.TABLE_NAME}")
            return int(cursor.fetchone()[0])

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close database connection."""
        self._conn.close()

    def __enter__(self) -> SQLiteStore:
        """Context manager entry."""
        return self

    def __exit__(self, *args: object) -> None:
        """Context manager exit."""
        self.close()
