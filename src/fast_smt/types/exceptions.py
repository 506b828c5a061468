"""Exception hierarchy for the sparse Merkle tree."""

from __future__ import annotations


class SMTError(Exception):
    """
    Base exception for all tree, store and proof errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class KeyOutOfRangeError(SMTError):
    """
    Raised when a key cannot be placed in the 256-bit path space or the number of
    leaves would exceed the configured ceiling.

    Attributes:
        detail: Description of what was out of range.
        limit: The ceiling that was exceeded (if applicable).
        actual: The offending count (if applicable).
    """

    def __init__(
        self,
        detail: str,
        *,
        limit: int | None = None,
        actual: int | None = None,
    ) -> None:
        self.detail = detail
        self.limit = limit
        self.actual = actual

        msg = detail
        if limit is not None and actual is not None:
            msg = f"{detail} (limit {limit}, got {actual})"
        elif limit is not None:
            msg = f"{detail} (limit {limit})"

        super().__init__(msg)


class MalformedProofError(SMTError):
    """
    Raised when a proof is structurally inconsistent, truncated or carries leftover
    material during verification or decompilation.

    Attributes:
        detail: Description of what went wrong.
        offset: The byte offset where the error occurred (if known).
    """

    def __init__(self, detail: str, *, offset: int | None = None) -> None:
        self.detail = detail
        self.offset = offset

        msg = f"Malformed proof: {detail}"
        if offset is not None:
            msg = f"{msg} (at byte offset {offset})"

        super().__init__(msg)


class StorageFailureError(SMTError):
    """
    Raised when a store reports an I/O-level problem.

    A clean "not found" is never a failure; stores report it as `None`.

    Attributes:
        operation: The store operation being performed (e.g. "get_branch").
        backend: The store implementation name (if known).
    """

    def __init__(self, operation: str, *, backend: str | None = None) -> None:
        self.operation = operation
        self.backend = backend

        if backend:
            msg = f"Storage failure in {backend} during {operation}"
        else:
            msg = f"Storage failure during {operation}"

        super().__init__(msg)


class InvalidInputError(SMTError):
    """Raised when an argument is unusable, e.g. an empty key set for a proof."""
