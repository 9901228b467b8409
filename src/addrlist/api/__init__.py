from __future__ import annotations

from fastapi import FastAPI

from ..core.registry import LinkedAddressList
from .routes.listing import mount_list_api


def create_api_app(registry: LinkedAddressList | None = None) -> FastAPI:
    """Create the HTTP app serving one linked address list.

    The list is owned by the caller; a fresh empty list is created when none is given.
    """

    if registry is None:
        registry = LinkedAddressList()

    app = FastAPI(title="addrlist", version="0.1.0")
    app.state.registry = registry

    mount_list_api(app, registry)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/api/events")
    def events() -> dict[str, int]:
        # Minimal polling endpoint.
        return {"revision": registry.revision()}

    return app
