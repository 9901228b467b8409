from __future__ import annotations

from .body import parse_address, require_address_field

__all__ = [
    "parse_address",
    "require_address_field",
]
