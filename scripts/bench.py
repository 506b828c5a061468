"""Time the core tree operations over trees of growing size.

Each run fills a fresh in-memory tree with random keys and values, then times:

    - update:   inserting all leaves
    - get:      reading random (mostly absent) keys
    - proof:    building one proof over 32 stored keys
    - verify:   checking that proof against the root
    - validate: walking the whole store

Usage:
    uv run python scripts/bench.py
    uv run python scripts/bench.py --sizes 256 4096 --hasher blake3 --hasher turboshake128

Pure Python hashes 256 times per update, so the 2^16 size takes minutes per backend.
"""

from __future__ import annotations

import argparse
import random
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from fast_smt import SparseMerkleTree
from fast_smt.hashing import HASHERS, HasherFactory, get_hasher
from fast_smt.types import H256

DEFAULT_SIZES = [1 << 8, 1 << 12, 1 << 16]
"""Leaf counts benchmarked by default."""

PROOF_KEYS = 32
"""Number of stored keys covered by the benchmarked proof."""

GET_SAMPLES = 256
"""Number of random reads timed per tree."""


@dataclass(frozen=True, slots=True)
class BenchResult:
    """Wall-clock seconds for each operation on one tree."""

    hasher: str
    size: int
    update: float
    get: float
    proof: float
    verify: float
    validate: float


def _random_h256(rng: random.Random) -> H256:
    return H256(rng.randbytes(32))


def _timed(action: Callable[[], Any]) -> tuple[float, Any]:
    start = time.perf_counter()
    result = action()
    return time.perf_counter() - start, result


def bench_tree(hasher_name: str, size: int, seed: int = 0) -> BenchResult:
    """Build one tree of `size` random leaves and time each operation on it."""
    rng = random.Random(seed)
    hasher: HasherFactory = get_hasher(hasher_name)
    tree = SparseMerkleTree(hasher=hasher)
    pairs = [(_random_h256(rng), _random_h256(rng)) for _ in range(size)]

    update_time, _ = _timed(lambda: tree.update_all(pairs))

    lookups = [_random_h256(rng) for _ in range(GET_SAMPLES)]
    get_time, _ = _timed(lambda: [tree.get(key) for key in lookups])

    keys = [key for key, _ in pairs[:PROOF_KEYS]]
    proof_time, proof = _timed(lambda: tree.merkle_proof(keys))

    leaves = [(key, tree.get(key)) for key in keys]
    verify_time, verified = _timed(lambda: proof.verify(tree.root, leaves, hasher))
    if not verified:
        raise RuntimeError(f"proof over {len(keys)} keys failed to verify")

    validate_time, valid = _timed(tree.validate)
    if not valid:
        raise RuntimeError(f"tree of {size} leaves failed validation")

    return BenchResult(
        hasher=hasher_name,
        size=size,
        update=update_time,
        get=get_time / GET_SAMPLES,
        proof=proof_time,
        verify=verify_time,
        validate=validate_time,
    )


def main() -> None:
    """Parse arguments, run every benchmark and print a table."""
    parser = argparse.ArgumentParser(description="Sparse Merkle tree benchmarks")
    parser.add_argument("--sizes", type=int, nargs="+", default=DEFAULT_SIZES)
    parser.add_argument(
        "--hasher",
        action="append",
        choices=sorted(HASHERS),
        help="Backend to benchmark (can be repeated; default: blake3 and turboshake128)",
    )
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    hashers = args.hasher or ["blake3", "turboshake128"]
    print(
        f"{'hasher':<14} {'leaves':>7} {'update s':>10} {'get ms':>8} "
        f"{'proof ms':>9} {'verify ms':>10} {'validate s':>11}"
    )
    for size in args.sizes:
        for name in hashers:
            r = bench_tree(name, size, args.seed)
            print(
                f"{r.hasher:<14} {r.size:>7} {r.update:>10.3f} {r.get * 1e3:>8.3f} "
                f"{r.proof * 1e3:>9.2f} {r.verify * 1e3:>10.2f} {r.validate:>11.3f}"
            )


if __name__ == "__main__":
    main()
