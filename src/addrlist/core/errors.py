"""
Linked list errors.

Error hierarchy:
    LinkedListError (base)
    ├── InvalidAddressError
    ├── DuplicateAddressError
    ├── IndexMismatchError
    ├── InvalidInitialSetError
    └── InvariantViolationError

Every rejection leaves the list untouched. Messages are stable so callers may
match on them.
"""

from __future__ import annotations

from typing import Any


class LinkedListError(Exception):
    """Base error for all linked list rejections."""

    code = "linked_list_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code, "message": self.message, "details": self.details}


class InvalidAddressError(LinkedListError):
    """Operand is the zero address, the sentinel, or (for new entries) the list itself."""

    code = "invalid_address"


class DuplicateAddressError(LinkedListError):
    """An address meant to become a new member is already a member."""

    code = "duplicate_address"


class IndexMismatchError(LinkedListError):
    """
    The supplied previous item does not precede the target.

    Usually a stale read: re-read the addresses (or ask for the predecessor)
    and resubmit.
    """

    code = "index_mismatch"


class InvalidInitialSetError(LinkedListError, ValueError):
    """The initial member sequence contains a reserved or repeated address."""

    code = "invalid_initial_set"


class InvariantViolationError(LinkedListError):
    """Raised by `check_invariants()` when the chain is inconsistent."""

    code = "invariant_violation"

    def __init__(self, invariant: int, message: str, details: dict[str, Any] | None = None):
        super().__init__(f"[invariant {invariant}] {message}", details)
        self.invariant = invariant
        self.reason = message

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "invariant": self.invariant, "reason": self.reason}


ERRORS_BY_CODE: dict[str, type[LinkedListError]] = {
    cls.code: cls
    for cls in (
        InvalidAddressError,
        DuplicateAddressError,
        IndexMismatchError,
        InvalidInitialSetError,
    )
}
