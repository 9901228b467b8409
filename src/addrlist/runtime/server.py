from __future__ import annotations

import contextlib
import logging
import os
import socket
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Iterable

import httpx
import uvicorn

from ..core.registry import LinkedAddressList
from ..sdk.client import AddrListClient
from .app import create_app, initial_from_env

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddrListServer:
    host: str
    port: int
    url: str
    registry: LinkedAddressList = field(compare=False, repr=False)

    def as_client(self) -> AddrListClient:
        return AddrListClient(self.url.rstrip("/"))

    def is_member(self, item: Any) -> bool:
        return self.registry.is_member(item)

    def count(self) -> int:
        return self.registry.count()

    def get_addresses(self) -> list[str]:
        return self.registry.get_addresses()

    def insert(self, new_item: Any) -> None:
        self.registry.insert(new_item)

    def remove(self, prev_item: Any, item: Any) -> None:
        self.registry.remove(prev_item, item)

    def swap(self, prev_item: Any, old_item: Any, new_item: Any) -> None:
        self.registry.swap(prev_item, old_item, new_item)


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _normalize_base_url(url: str) -> str:
    url = url.strip()
    if not url:
        return ""
    # Allow passing just host:port.
    if "://" not in url:
        url = "http://" + url
    return url.rstrip("/")


def _is_server_alive(base_url: str, *, timeout_s: float = 0.2) -> bool:
    """Check whether an addrlist server is reachable at `base_url`."""

    try:
        with httpx.Client(base_url=base_url, timeout=timeout_s) as client:
            r = client.get("/healthz")
            if r.status_code != 200:
                return False
            data = r.json()
            return bool(data.get("ok"))
    except (httpx.HTTPError, ValueError):
        return False


def _attach(
    base_url: str,
    *,
    initial: Iterable[Any] | None,
    self_address: Any | None,
    registry: LinkedAddressList | None,
) -> AddrListClient:
    if initial is not None or self_address is not None or registry is not None:
        logger.warning(
            "Attaching to existing server at %s; ignoring initial/self_address/registry arguments",
            base_url,
        )
    return AddrListClient(base_url)


def run(
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    initial: Iterable[Any] | None = None,
    self_address: Any | None = None,
    registry: LinkedAddressList | None = None,
    log_level: str | None = None,
    access_log: bool = False,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
) -> AddrListServer | AddrListClient:
    """Serve a linked address list over HTTP with a single Python call.

    Behavior:
    - If ADDRLIST_URL is set, we *attach* to that existing server (client mode) unless
      `new_server=True`.
    - Otherwise, if `port != 0` and a server is already reachable at http://{host}:{port},
      we attach to it (client mode) unless `new_server=True`.
    - Otherwise we start a new local server in a daemon thread and return an
      `AddrListServer`. Its list is `registry` if given, else a new list built from
      `initial` (or ADDRLIST_INITIAL) and `self_address` (or ADDRLIST_SELF_ADDRESS).

    Notes:
    - `port=0` means "pick a free port", so there's nothing to attach to.
    - Uvicorn's per-request access log is off by default; clients poll `/api/events`.
    - `registry` cannot be combined with `initial` or `self_address` (ValueError).
    - When attaching, `initial` and `self_address` are ignored with a warning; the
      existing server keeps its own list.
    """

    if registry is not None and (initial is not None or self_address is not None):
        raise ValueError("registry cannot be combined with initial or self_address")

    env_url = _normalize_base_url(os.getenv("ADDRLIST_URL", ""))
    if log_level is None:
        log_level = os.getenv("ADDRLIST_LOG_LEVEL", "info").lower()

    # 1) Try attaching to an explicitly provided server.
    if env_url and not new_server:
        if _is_server_alive(env_url, timeout_s=connect_timeout_s):
            logger.info("Attaching to addrlist server at %s", env_url)
            return _attach(env_url, initial=initial, self_address=self_address, registry=registry)

    # 2) Try attaching to host/port if they are explicitly chosen.
    if port != 0 and not new_server:
        default_url = _normalize_base_url(f"http://{host}:{port}")
        if _is_server_alive(default_url, timeout_s=connect_timeout_s):
            logger.info("Attaching to addrlist server at %s", default_url)
            return _attach(default_url, initial=initial, self_address=self_address, registry=registry)

    # 3) Start a fresh server.
    if registry is None:
        if initial is None:
            initial = initial_from_env()
        if self_address is None:
            self_address = os.getenv("ADDRLIST_SELF_ADDRESS", "").strip() or None
        registry = LinkedAddressList(initial, self_address=self_address)

    if port == 0:
        port = _find_free_port(host)

    app = create_app(registry)

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, access_log=access_log)
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    # Wait until uvicorn has bound the socket so an immediate client call doesn't race startup.
    deadline = time.monotonic() + 5.0
    while not server.started and thread.is_alive() and time.monotonic() < deadline:
        time.sleep(0.01)

    url = f"http://{host}:{port}/"
    logger.info("Serving linked address list (%d members) at %s", registry.count(), url)
    return AddrListServer(host=host, port=port, url=url, registry=registry)
