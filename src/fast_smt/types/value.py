"""The Value capability stored at tree leaves."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from typing_extensions import Self


@runtime_checkable
class Value(Protocol):
    """
    Protocol for user payloads stored at a leaf.

    A value only needs to expose the bytes hashed into its leaf digest and a canonical
    zero instance. Writing the zero instance is the same operation as deleting the key.
    """

    def as_bytes(self) -> bytes:
        """Bytes hashed into the leaf digest."""
        ...

    @classmethod
    def zero(cls) -> Self:
        """The canonical empty value."""
        ...


def is_zero_value(value: Value) -> bool:
    """Whether `value` equals its type's zero instance."""
    return value == type(value).zero()
