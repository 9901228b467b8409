from __future__ import annotations

import secrets
from typing import Any

ZERO_ADDRESS = "0x" + "0" * 40
SENTINEL_ADDRESS = "0x" + "0" * 39 + "1"

_HEX_DIGITS = frozenset("0123456789abcdef")


def normalize_address(value: Any) -> str:
    """Return the canonical form of an address.

    Accepts:
    - a hex string with or without the `0x` prefix, in any case
    - 20 raw bytes

    The canonical form is lower-case, `0x`-prefixed, 40 hex digits.
    """

    if isinstance(value, (bytes, bytearray)):
        if len(value) != 20:
            raise ValueError(f"address must be 20 bytes, got {len(value)}")
        return "0x" + bytes(value).hex()

    if not isinstance(value, str):
        raise ValueError(f"address must be a hex string or 20 bytes, got {type(value).__name__}")

    v = value.strip().lower()
    if v.startswith("0x"):
        v = v[2:]
    if len(v) != 40 or not set(v) <= _HEX_DIGITS:
        raise ValueError(f"Invalid address: {value!r}")
    return "0x" + v


def random_address() -> str:
    return "0x" + secrets.token_hex(20)


def is_reserved(address: str, self_address: str | None = None) -> bool:
    """True for addresses that can never be list members."""
    return address in (ZERO_ADDRESS, SENTINEL_ADDRESS) or (self_address is not None and address == self_address)
