from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException

from ...core.errors import InvariantViolationError, LinkedListError
from ...core.registry import LinkedAddressList
from ..parsing import parse_address, require_address_field
from ..serializers import error_status, error_to_detail, list_to_snapshot

logger = logging.getLogger(__name__)


def _rejected(e: LinkedListError) -> HTTPException:
    logger.debug("Rejected list operation: %s (%s)", e.code, e.message)
    return HTTPException(status_code=error_status(e), detail=error_to_detail(e))


def mount_list_api(app: FastAPI, registry: LinkedAddressList) -> None:
    """Mount the linked list endpoints for `registry`.

    Mutations answer with the full post-mutation snapshot so callers can derive
    the next predecessor without a second round trip.
    """

    @app.get("/api/list")
    def get_list() -> dict[str, Any]:
        return list_to_snapshot(registry)

    @app.get("/api/list/sentinel")
    def get_sentinel() -> dict[str, str]:
        return {"sentinel": registry.sentinel()}

    @app.get("/api/list/count")
    def get_count() -> dict[str, int]:
        return {"count": registry.count()}

    @app.get("/api/list/addresses")
    def get_addresses() -> list[str]:
        return registry.get_addresses()

    @app.get("/api/list/members/{address}")
    def get_membership(address: str) -> dict[str, Any]:
        addr = parse_address(address, field="address")
        return {"address": addr, "isMember": registry.is_member(addr)}

    @app.get("/api/list/members/{address}/prev")
    def get_predecessor(address: str) -> dict[str, str]:
        addr = parse_address(address, field="address")
        try:
            prev = registry.predecessor_of(addr)
        except KeyError:
            raise HTTPException(
                status_code=404,
                detail={"error": "not_a_member", "message": f"Unknown member: {addr}", "details": {"address": addr}},
            )
        return {"address": addr, "prevItem": prev}

    @app.post("/api/list/insert")
    def insert_item(body: dict) -> dict[str, Any]:
        new_item = require_address_field(body, "newItem")
        try:
            registry.insert(new_item)
        except LinkedListError as e:
            raise _rejected(e)
        return list_to_snapshot(registry)

    @app.post("/api/list/remove")
    def remove_item(body: dict) -> dict[str, Any]:
        prev_item = require_address_field(body, "prevItem")
        item = require_address_field(body, "item")
        try:
            registry.remove(prev_item, item)
        except LinkedListError as e:
            raise _rejected(e)
        return list_to_snapshot(registry)

    @app.post("/api/list/swap")
    def swap_item(body: dict) -> dict[str, Any]:
        prev_item = require_address_field(body, "prevItem")
        old_item = require_address_field(body, "oldItem")
        new_item = require_address_field(body, "newItem")
        try:
            registry.swap(prev_item, old_item, new_item)
        except LinkedListError as e:
            raise _rejected(e)
        return list_to_snapshot(registry)

    @app.get("/api/list/verify")
    def verify_list() -> dict[str, Any]:
        try:
            registry.check_invariants()
        except InvariantViolationError as e:
            logger.error("Linked list is inconsistent: %s", e.message)
            raise HTTPException(status_code=error_status(e), detail=error_to_detail(e))
        return {"ok": True, "count": registry.count()}
