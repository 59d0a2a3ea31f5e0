"""Decoding of the Bot API response envelope.

Every Bot API answer, success or failure, is a JSON object of the form
`{"ok": bool, "result": ..., "error_code": int, "description": str}`.
`unwrap_envelope` turns the raw HTTP body into either the `result` value or
one of the bridge errors, so callers never look at the envelope themselves.
"""
from __future__ import annotations

import json
from typing import Any, Optional

from core.errors import RemoteApiError, TransportError


def parse_envelope(text: str, status_code: Optional[int] = None) -> dict[str, Any]:
    """Parse `text` as an envelope object or raise `TransportError`."""
    try:
        data = json.loads(text)
    except ValueError as e:
        snippet = text[:200] if text else "<empty body>"
        raise TransportError(
            f"Non-JSON response from Telegram (HTTP {status_code}): {snippet}", status_code
        ) from e

    if not isinstance(data, dict) or not isinstance(data.get("ok"), bool):
        raise TransportError(
            f"Malformed response envelope from Telegram (HTTP {status_code})", status_code
        )
    return data


def unwrap_envelope(text: str, status_code: Optional[int] = None) -> Any:
    """Return the envelope's `result`, raising `RemoteApiError` when `ok` is false."""
    envelope = parse_envelope(text, status_code)
    if not envelope["ok"]:
        raise RemoteApiError(envelope.get("error_code"), envelope.get("description") or "")
    return envelope.get("result")
