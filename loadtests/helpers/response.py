"""Response error extraction for load test observability.

Parses shopfront API error responses into human-readable messages. Every
error body has the shape ``{"error": code, "message": text, ...}``;
request validation failures add a ``fields`` list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a compact error message for Locust failure messages and log lines."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:300]

    if "error" in body:
        detail = f"{body['error']}: {body.get('message', '')}".rstrip(": ")
        fields = body.get("fields")
        if isinstance(fields, list):
            parts = []
            for err in fields:
                loc = ".".join(str(p) for p in err.get("loc", []))
                parts.append(f"{loc}: {err.get('msg', err)}" if loc else str(err.get("msg", err)))
            detail = f"{detail} | {' | '.join(parts)}"
        return detail

    return str(body)[:300]
