"""Tests for environment configuration."""

from __future__ import annotations

import importlib

import pytest

from fast_smt import config
from fast_smt.hashing import HASHERS


def test_unknown_hasher_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    """An unsupported SMT_HASHER fails at import."""
    monkeypatch.setenv("SMT_HASHER", "md5")
    try:
        with pytest.raises(ValueError, match="Invalid SMT_HASHER"):
            importlib.reload(config)
    finally:
        monkeypatch.setenv("SMT_HASHER", "blake2b")
        importlib.reload(config)


def test_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    """Backend names are normalized to lower case."""
    monkeypatch.setenv("SMT_HASHER", "SHA256")
    try:
        assert importlib.reload(config).SMT_HASHER == "sha256"
    finally:
        monkeypatch.setenv("SMT_HASHER", "blake2b")
        importlib.reload(config)


def test_supported_names_match_registry() -> None:
    """Every name the environment accepts resolves to a registered backend."""
    assert sorted(config._SUPPORTED_HASHERS) == sorted(HASHERS)
