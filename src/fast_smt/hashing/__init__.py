"""
Hash backends for the sparse Merkle tree.

Every backend implements the `Hasher` protocol. `HASHERS` maps configuration names
to backend classes; `DEFAULT_HASHER` is the backend selected by `SMT_HASHER`.
"""

from fast_smt.config import SMT_HASHER
from fast_smt.types import InvalidInputError

from .blake2b import BLAKE2B_PERSONALIZATION, Blake2bHasher
from .blake3 import Blake3Hasher
from .interface import Hasher, HasherFactory, digest
from .keccak import Keccak256Hasher
from .sha256 import Sha256Hasher
from .turboshake import TurboShake128Hasher

HASHERS: dict[str, HasherFactory] = {
    "blake2b": Blake2bHasher,
    "blake3": Blake3Hasher,
    "sha256": Sha256Hasher,
    "keccak256": Keccak256Hasher,
    "turboshake128": TurboShake128Hasher,
}
"""Backends by configuration name."""


def get_hasher(name: str) -> HasherFactory:
    """
    Look up a backend by name (case-insensitive).

    Raises:
        InvalidInputError: If no backend is registered under `name`.
    """
    try:
        return HASHERS[name.lower()]
    except KeyError:
        raise InvalidInputError(
            f"Unknown hasher '{name}'. Supported values: {sorted(HASHERS)}"
        ) from None


DEFAULT_HASHER: HasherFactory = get_hasher(SMT_HASHER)
"""The backend used when none is given explicitly."""

__all__ = [
    "BLAKE2B_PERSONALIZATION",
    "Blake2bHasher",
    "Blake3Hasher",
    "DEFAULT_HASHER",
    "HASHERS",
    "Hasher",
    "HasherFactory",
    "Keccak256Hasher",
    "Sha256Hasher",
    "TurboShake128Hasher",
    "digest",
    "get_hasher",
]
