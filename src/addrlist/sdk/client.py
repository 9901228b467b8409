from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.addresses import normalize_address
from ..core.errors import ERRORS_BY_CODE, InvariantViolationError

logger = logging.getLogger(__name__)


def _raise_for_response(res: httpx.Response, what: str) -> None:
    if res.status_code < 400:
        return

    detail: Any = None
    try:
        body = res.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        detail = body.get("detail")

    if isinstance(detail, dict):
        code = str(detail.get("error", ""))
        message = str(detail.get("message", ""))
        details = detail.get("details") or {}
        if code == InvariantViolationError.code:
            raise InvariantViolationError(int(detail.get("invariant", 0)), str(detail.get("reason", message)), details)
        cls = ERRORS_BY_CODE.get(code)
        if cls is not None:
            raise cls(message, details)
        if code in {"malformed_address", "malformed_body", "missing_field"}:
            raise ValueError(message)

    raise RuntimeError(f"{what} failed: {res.status_code} {res.text}")


class AddrListClient:
    """HTTP client for a running addrlist server.

    Mirrors `LinkedAddressList`: queries return plain values, rejected mutations
    raise the same `LinkedListError` subclasses the in-process list raises.

    `http_client` lets callers supply their own `httpx.Client` (for example a
    FastAPI `TestClient`); otherwise a short-lived client is opened per call.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        *,
        http_client: httpx.Client | None = None,
        timeout_s: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http_client = http_client
        self._timeout_s = float(timeout_s)

    def _send(self, method: str, path: str, *, json: dict[str, Any] | None = None) -> httpx.Response:
        if self._http_client is not None:
            return self._http_client.request(method, path, json=json)
        with httpx.Client(base_url=self.base_url, timeout=self._timeout_s) as client:
            return client.request(method, path, json=json)

    def _request(self, method: str, path: str, *, what: str, json: dict[str, Any] | None = None) -> Any:
        res = self._send(method, path, json=json)
        _raise_for_response(res, what)
        return res.json()

    # Queries

    def sentinel(self) -> str:
        return str(self._request("GET", "/api/list/sentinel", what="Sentinel request")["sentinel"])

    def count(self) -> int:
        return int(self._request("GET", "/api/list/count", what="Count request")["count"])

    def get_addresses(self) -> list[str]:
        return [str(a) for a in self._request("GET", "/api/list/addresses", what="Addresses request")]

    def is_member(self, item: Any) -> bool:
        addr = normalize_address(item)
        data = self._request("GET", f"/api/list/members/{addr}", what="Membership request")
        return bool(data["isMember"])

    def predecessor_of(self, item: Any) -> str:
        addr = normalize_address(item)
        res = self._send("GET", f"/api/list/members/{addr}/prev")
        if res.status_code == 404:
            raise KeyError(addr)
        _raise_for_response(res, "Predecessor request")
        return str(res.json()["prevItem"])

    def snapshot(self) -> dict[str, Any]:
        return self._request("GET", "/api/list", what="List request")

    def revision(self) -> int:
        return int(self._request("GET", "/api/events", what="Events request")["revision"])

    def verify(self) -> bool:
        return bool(self._request("GET", "/api/list/verify", what="Verify request")["ok"])

    # Mutations

    def insert(self, new_item: Any) -> dict[str, Any]:
        body = {"newItem": normalize_address(new_item)}
        return self._request("POST", "/api/list/insert", json=body, what="Insert")

    def remove(self, prev_item: Any, item: Any) -> dict[str, Any]:
        body = {"prevItem": normalize_address(prev_item), "item": normalize_address(item)}
        return self._request("POST", "/api/list/remove", json=body, what="Remove")

    def swap(self, prev_item: Any, old_item: Any, new_item: Any) -> dict[str, Any]:
        body = {
            "prevItem": normalize_address(prev_item),
            "oldItem": normalize_address(old_item),
            "newItem": normalize_address(new_item),
        }
        return self._request("POST", "/api/list/swap", json=body, what="Swap")

    def remove_item(self, item: Any) -> dict[str, Any]:
        """Look up the current predecessor of `item`, then remove it.

        Another writer may still get in between the lookup and the removal; the
        server then rejects with IndexMismatchError and the caller can retry.
        """

        prev = self.predecessor_of(item)
        logger.debug("Removing %s after %s", item, prev)
        return self.remove(prev, item)

    def swap_item(self, old_item: Any, new_item: Any) -> dict[str, Any]:
        """Look up the current predecessor of `old_item`, then swap it for `new_item`."""

        prev = self.predecessor_of(old_item)
        logger.debug("Swapping %s for %s after %s", old_item, new_item, prev)
        return self.swap(prev, old_item, new_item)


__all__ = ["AddrListClient"]
