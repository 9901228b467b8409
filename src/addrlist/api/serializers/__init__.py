from __future__ import annotations

from .listing import error_status, error_to_detail, list_to_snapshot

__all__ = [
    "list_to_snapshot",
    "error_to_detail",
    "error_status",
]
