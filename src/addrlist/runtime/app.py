from __future__ import annotations

import os

from fastapi import FastAPI

from ..api import create_api_app
from ..core.registry import LinkedAddressList


def initial_from_env() -> list[str]:
    raw = os.getenv("ADDRLIST_INITIAL", "")
    return [part.strip() for part in raw.split(",") if part.strip()]


def registry_from_env() -> LinkedAddressList:
    """Build a list from ADDRLIST_INITIAL / ADDRLIST_SELF_ADDRESS."""

    self_address = os.getenv("ADDRLIST_SELF_ADDRESS", "").strip() or None
    return LinkedAddressList(initial_from_env(), self_address=self_address)


def create_app(registry: LinkedAddressList | None = None) -> FastAPI:
    """Create the full app for `registry`, configured from the environment if omitted.

    Convenience for uvicorn: `uvicorn --factory addrlist.runtime.app:create_app`
    """

    if registry is None:
        registry = registry_from_env()
    return create_api_app(registry)
