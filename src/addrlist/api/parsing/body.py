from __future__ import annotations

from typing import Any

from fastapi import HTTPException

from ...core.addresses import normalize_address


def parse_address(value: Any, *, field: str) -> str:
    try:
        return normalize_address(value)
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail={"error": "malformed_address", "message": str(e), "details": {"field": field}},
        )


def require_address_field(body: Any, field: str) -> str:
    if not isinstance(body, dict):
        raise HTTPException(
            status_code=422,
            detail={"error": "malformed_body", "message": "Request body must be a JSON object", "details": {}},
        )
    if field not in body or body[field] is None:
        raise HTTPException(
            status_code=422,
            detail={"error": "missing_field", "message": f"Missing field: {field}", "details": {"field": field}},
        )
    return parse_address(body[field], field=field)
