"""Records persisted by a store."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from fast_smt.constants import MAX_HEIGHT
from fast_smt.types import H256, InternalKey, StrictBaseModel


class BranchKey(StrictBaseModel):
    """
    The position of a branch.

    A branch is located by its height and by the path bits above that height. Every
    leaf below the branch shares those bits, so `key.parent_path(height)` of any such
    leaf yields the same `node_key`.
    """

    height: int = Field(ge=0, le=MAX_HEIGHT, description="Branch height, 255 for the root.")
    node_key: InternalKey = Field(description="Path prefix with bits 0..=height cleared.")


class BranchNode(StrictBaseModel):
    """The two child digests of a non-zero branch."""

    left: H256
    right: H256

    def is_zero(self) -> bool:
        """Whether both children are zero, i.e. the branch must not be persisted."""
        return self.left.is_zero() and self.right.is_zero()

    def sibling(self, is_right: bool) -> H256:
        """The child opposite the one a path descending `is_right` enters."""
        return self.left if is_right else self.right


class LeafNode(StrictBaseModel):
    """A stored key together with its non-zero value."""

    key: InternalKey
    value: Any = Field(description="A non-zero instance of the tree's value type.")
