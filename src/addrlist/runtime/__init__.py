from __future__ import annotations

from .app import create_app
from .server import AddrListServer, run

__all__ = ["create_app", "AddrListServer", "run"]
