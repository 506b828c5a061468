"""Shared fixtures for tree tests."""

from __future__ import annotations

import pytest

from fast_smt import SparseMerkleTree
from fast_smt.hashing import Blake2bHasher


@pytest.fixture
def tree() -> SparseMerkleTree:
    """An empty tree over an in-memory store."""
    return SparseMerkleTree(hasher=Blake2bHasher)
