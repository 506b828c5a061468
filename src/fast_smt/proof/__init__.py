"""Compact inclusion and exclusion proofs."""

from .compiled import CompiledMerkleProof
from .proof import MerkleProof, normalize_leaves

__all__ = [
    "CompiledMerkleProof",
    "MerkleProof",
    "normalize_leaves",
]
