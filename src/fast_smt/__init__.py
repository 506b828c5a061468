"""
Fast sparse Merkle tree.

A 256-level authenticated key-value map that stores only non-empty nodes and produces
compact multi-key inclusion and exclusion proofs against a single root.

Example::

    from fast_smt import H256, SparseMerkleTree
    from fast_smt.hashing import Blake2bHasher

    tree = SparseMerkleTree(hasher=Blake2bHasher)
    key = H256(b"\\x01" * 32)
    root = tree.update(key, H256(b"\\x02" * 32))

    proof = tree.merkle_proof([key])
    assert proof.verify(root, [(key, tree.get(key))], Blake2bHasher)
"""

from .constants import KEY_LIMIT, TREE_HEIGHT
from .proof import CompiledMerkleProof, MerkleProof
from .tree import SparseMerkleTree
from .types import ZERO_HASH, H256, InternalKey, Value

__all__ = [
    "CompiledMerkleProof",
    "H256",
    "InternalKey",
    "KEY_LIMIT",
    "MerkleProof",
    "SparseMerkleTree",
    "TREE_HEIGHT",
    "Value",
    "ZERO_HASH",
]
