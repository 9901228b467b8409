from __future__ import annotations

from .service import LinkedAddressList

__all__ = ["LinkedAddressList"]
