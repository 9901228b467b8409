from __future__ import annotations

from .addresses import SENTINEL_ADDRESS, ZERO_ADDRESS, is_reserved, normalize_address, random_address
from .errors import (
    DuplicateAddressError,
    IndexMismatchError,
    InvalidAddressError,
    InvalidInitialSetError,
    InvariantViolationError,
    LinkedListError,
)
from .registry import LinkedAddressList

__all__ = [
    "SENTINEL_ADDRESS",
    "ZERO_ADDRESS",
    "normalize_address",
    "random_address",
    "is_reserved",
    "LinkedAddressList",
    "LinkedListError",
    "InvalidAddressError",
    "DuplicateAddressError",
    "IndexMismatchError",
    "InvalidInitialSetError",
    "InvariantViolationError",
]
