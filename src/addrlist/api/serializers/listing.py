from __future__ import annotations

from typing import Any

from ...core.errors import LinkedListError
from ...core.registry import LinkedAddressList

_STATUS_BY_CODE: dict[str, int] = {
    "invalid_address": 400,
    "duplicate_address": 409,
    "index_mismatch": 409,
    "invariant_violation": 500,
}


def list_to_snapshot(registry: LinkedAddressList) -> dict[str, Any]:
    # Taken under the list's lock, so count and addresses always agree.
    return registry.snapshot()


def error_status(e: LinkedListError) -> int:
    return _STATUS_BY_CODE.get(e.code, 400)


def error_to_detail(e: LinkedListError) -> dict[str, Any]:
    return e.to_dict()
