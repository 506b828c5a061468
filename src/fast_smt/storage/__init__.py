"""
Storage module for sparse tree nodes.

Provides the store abstraction the tree writes through, an in-memory default and a
SQLite-backed persistent implementation.
"""

from .memory import DefaultStore
from .namespaces import BranchNamespace, LeafNamespace
from .nodes import BranchKey, BranchNode, LeafNode
from .sqlite import SQLiteStore
from .store import Store

__all__ = [
    "Store",
    "DefaultStore",
    "SQLiteStore",
    "BranchKey",
    "BranchNode",
    "LeafNode",
    "BranchNamespace",
    "LeafNamespace",
]
