from __future__ import annotations

from .client import AddrListClient

__all__ = ["AddrListClient"]
