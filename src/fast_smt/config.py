"""
Global configuration for the sparse Merkle tree.

This module contains environment-specific settings that apply across the package.
"""

import os

_SUPPORTED_HASHERS: list[str] = ["blake2b", "blake3", "sha256", "keccak256", "turboshake128"]

SMT_HASHER = os.environ.get("SMT_HASHER", "blake2b").lower()
"""The hash backend used when a tree or proof is not given one explicitly."""

if SMT_HASHER not in _SUPPORTED_HASHERS:
    raise ValueError(
        f"Invalid SMT_HASHER environment variable: '{SMT_HASHER}'. "
        f"Supported values: {_SUPPORTED_HASHERS}"
    )
