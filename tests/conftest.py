"""Pytest configuration and shared fixtures."""

import os

from hypothesis import settings

# Pin the default backend before any fast_smt module reads it.
os.environ["SMT_HASHER"] = "blake2b"

# Create a profile named "no_deadline" with deadline disabled.
settings.register_profile("no_deadline", deadline=None, max_examples=25)
settings.load_profile("no_deadline")
