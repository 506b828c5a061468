"""Reusable type definitions for the sparse Merkle tree."""

from .base import CamelModel, StrictBaseModel
from .byte_arrays import ZERO_HASH, BaseBytes, Bytes32, H256
from .exceptions import (
    InvalidInputError,
    KeyOutOfRangeError,
    MalformedProofError,
    SMTError,
    StorageFailureError,
)
from .internal_key import InternalKey
from .uint import BaseUint, Uint8, Uint32, Uint256
from .value import Value, is_zero_value

__all__ = [
    # Core types
    "BaseBytes",
    "Bytes32",
    "H256",
    "ZERO_HASH",
    "BaseUint",
    "Uint8",
    "Uint32",
    "Uint256",
    "InternalKey",
    "CamelModel",
    "StrictBaseModel",
    "Value",
    "is_zero_value",
    # Exceptions
    "SMTError",
    "KeyOutOfRangeError",
    "MalformedProofError",
    "StorageFailureError",
    "InvalidInputError",
]
