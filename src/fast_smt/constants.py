"""Tree-wide constants."""

from typing import Final

TREE_HEIGHT: Final = 256
"""Number of branch levels; one per bit of the 256-bit path key."""

MAX_HEIGHT: Final = TREE_HEIGHT - 1
"""Height of the root branch."""

BYTES_PER_DIGEST: Final = 32
"""Width of every digest, key and hint bitmap."""

KEY_LIMIT: Final = 2**32 - 1
"""Maximum number of distinct non-zero leaves; keeps proof indices within a uint32."""
