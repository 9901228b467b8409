from __future__ import annotations

from .core.addresses import SENTINEL_ADDRESS, ZERO_ADDRESS, normalize_address, random_address
from .core.errors import (
    DuplicateAddressError,
    IndexMismatchError,
    InvalidAddressError,
    InvalidInitialSetError,
    InvariantViolationError,
    LinkedListError,
)
from .core.registry import LinkedAddressList
from .runtime.server import AddrListServer, run
from .sdk.client import AddrListClient

__all__ = [
    "run",
    "AddrListServer",
    "AddrListClient",
    "LinkedAddressList",
    "SENTINEL_ADDRESS",
    "ZERO_ADDRESS",
    "normalize_address",
    "random_address",
    "LinkedListError",
    "InvalidAddressError",
    "DuplicateAddressError",
    "IndexMismatchError",
    "InvalidInitialSetError",
    "InvariantViolationError",
]
