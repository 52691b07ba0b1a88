"""Response error extraction for load test failure messages.

Storefront API error bodies come in three shapes:

- Request schema errors (422): {"detail": [{"loc": [...], "msg": "..."}]}
- Domain errors (400/404): {"error": {"field": ["msg", ...]}}
- Placement failures (500): {"error": "Error placing order"}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

_MAX_LEN = 300


def _field_messages(errors: dict) -> str:
    parts = []
    for field_name, messages in errors.items():
        if isinstance(messages, list):
            messages = "; ".join(str(m) for m in messages)
        parts.append(f"{field_name}: {messages}")
    return " | ".join(parts)


def extract_error_detail(response: Response) -> str:
    """Compact, human-readable summary of an API error response."""
    try:
        body = response.json()
    except ValueError:
        text = getattr(response, "text", "") or ""
        return text[:_MAX_LEN] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:_MAX_LEN]

    detail = body.get("detail")
    if isinstance(detail, list):
        return " | ".join(
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', err)}" for err in detail
        )

    error = body.get("error")
    if isinstance(error, dict):
        return _field_messages(error)
    if error is not None:
        return str(error)

    return str(body)[:_MAX_LEN]
