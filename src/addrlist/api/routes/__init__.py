from __future__ import annotations

from .listing import mount_list_api

__all__ = ["mount_list_api"]
