"""
Sparse Merkle tree CLI entry point.

Build a tree from a sentence, print its root, and optionally prove some of its words.
Word `i` is stored under the key `H(uint32_le(i))` with the value `H(word)`.

Usage::

    python -m fast_smt
    python -m fast_smt The quick brown fox --prove 0 --prove 3
    python -m fast_smt --hasher turboshake128 --db words.sqlite
    python -m fast_smt jumps --db words.sqlite --root 0x5f... --prove 0

Options:
    --hasher    Hash backend (default: the SMT_HASHER environment variable, or blake2b)
    --db        SQLite file to persist nodes in (default: in memory)
    --root      Root of the nodes already in --db, to continue an existing tree
    --prove     Word index to prove (can be repeated); an index past the end proves exclusion
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from fast_smt.config import SMT_HASHER
from fast_smt.hashing import HASHERS, HasherFactory, digest, get_hasher
from fast_smt.storage import DefaultStore, SQLiteStore, Store
from fast_smt.tree import SparseMerkleTree
from fast_smt.types import H256, InvalidInputError, SMTError, Uint32

DEFAULT_SENTENCE = "The quick brown fox jumps over the lazy dog"
"""Words used when none are given on the command line."""

logger = logging.getLogger(__name__)


def word_key(index: int, hasher: HasherFactory) -> H256:
    """Key under which the word at `index` is stored."""
    return digest(hasher, Uint32(index).encode_bytes())


def word_value(word: str, hasher: HasherFactory) -> H256:
    """Value stored for `word`; the empty word is the zero value."""
    if not word:
        return H256.zero()
    return digest(hasher, word.encode())


def build_tree(
    words: list[str], hasher: HasherFactory, store: Store, root: H256 | None
) -> SparseMerkleTree:
    """Insert every word into a tree over `store`."""
    tree = SparseMerkleTree(hasher=hasher, store=store, root=root)
    tree.update_all((word_key(i, hasher), word_value(word, hasher)) for i, word in enumerate(words))
    logger.info("Inserted %d words", len(words))
    return tree


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)


def run(
    words: list[str],
    hasher_name: str,
    db_path: Path | None = None,
    root: H256 | None = None,
    prove: list[int] | None = None,
) -> bool:
    """
    Build the tree, print its root and check the requested proofs.

    Returns:
        Whether every requested proof verified.
    """
    hasher = get_hasher(hasher_name)
    store: Store = SQLiteStore(db_path) if db_path is not None else DefaultStore()

    try:
        if root is None and store.leaf_count() > 0:
            raise InvalidInputError(
                f"{db_path} already holds nodes; pass --root to continue that tree"
            )

        tree = build_tree(words, hasher, store, root)
        print(f"root: {tree.root.hex()}")

        if not prove:
            return True

        keys = [word_key(i, hasher) for i in prove]
        proof = tree.merkle_proof(keys)
        compiled = proof.compile()
        leaves = [(key, tree.get(key)) for key in keys]
        verified = compiled.verify(tree.root, leaves, hasher)

        print(f"proof ({len(compiled)} bytes): {compiled.hex()}")
        print(f"verified: {verified}")
        return verified
    finally:
        if isinstance(store, SQLiteStore):
            store.close()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sparse Merkle tree demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "words",
        nargs="*",
        help=f"Words to insert (default: '{DEFAULT_SENTENCE}')",
    )
    parser.add_argument(
        "--hasher",
        choices=sorted(HASHERS),
        default=SMT_HASHER,
        help=f"Hash backend (default: {SMT_HASHER})",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="SQLite file to persist nodes in",
    )
    parser.add_argument(
        "--root",
        type=H256,
        default=None,
        help="Hex root of the nodes already in --db",
    )
    parser.add_argument(
        "--prove",
        action="append",
        type=int,
        default=[],
        help="Word index to prove (can be repeated)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    words = args.words or DEFAULT_SENTENCE.split()
    try:
        ok = run(words, args.hasher, args.db, args.root, args.prove)
    except SMTError as e:
        logger.error("%s", e)
        return 1
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
