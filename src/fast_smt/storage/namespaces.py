"""
Database namespace definitions for node tables.

Defines table names and schema constants for SQLite storage.
Each namespace represents one kind of tree node.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class BranchNamespace:
    """
    Namespace for branch storage.

    Branches are keyed by position: (height, 32-byte little-endian path prefix).
    The two child digests are stored as raw 32-byte blobs.
    """

    TABLE_NAME: str = "branches"
    """Table name for branch storage."""

    CREATE_TABLE: str = """
        CREATE TABLE IF NOT EXISTS branches (
            height INTEGER NOT NULL,
            node_key BLOB NOT NULL,
            left_digest BLOB NOT NULL,
            right_digest BLOB NOT NULL,
            PRIMARY KEY (height, node_key)
        )
    """
    """SQL to create branches table."""


@dataclass(frozen=True, slots=True)
class LeafNamespace:
    """
    Namespace for leaf storage.

    Leaves are keyed by their full 32-byte little-endian path.
    Values are stored in the value type's byte encoding.
    """

    TABLE_NAME: str = "leaves"
    """Table name for leaf storage."""

    CREATE_TABLE: str = """
        CREATE TABLE IF NOT EXISTS leaves (
            key BLOB PRIMARY KEY,
            value BLOB NOT NULL
        )
    """
    """SQL to create leaves table."""


BRANCHES = BranchNamespace()
LEAVES = LeafNamespace()

ALL_NAMESPACES = [BRANCHES, LEAVES]
