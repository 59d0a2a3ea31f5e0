"""Routing of MCP tool calls to Telegram client methods.

`dispatch` is the pure routing step and raises the bridge errors as they
happen. `call_tool` is the boundary the server uses: it resolves the token,
reuses a cached client and turns every bridge error into a failed
`ToolCallResult` so nothing escapes to the transport.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from core.client_cache import TOKEN_ARGUMENT, ClientCache, resolve_credential
from core.errors import BridgeError, UnknownToolError
from core.telegram_client import TelegramClient
from tools.registry import HANDLERS

logger = logging.getLogger(__name__)

FIELDS_ARGUMENT = "_fields"

# Consumed by the bridge itself, never sent to Telegram
RESERVED_ARGUMENTS = frozenset({TOKEN_ARGUMENT, FIELDS_ARGUMENT})


@dataclass(frozen=True)
class ToolCallResult:
    success: bool
    value: Any = None
    error: Optional[str] = None
    error_kind: Optional[str] = None

    @classmethod
    def ok(cls, value: Any) -> "ToolCallResult":
        return cls(success=True, value=value)

    @classmethod
    def failed(cls, exc: BridgeError) -> "ToolCallResult":
        return cls(success=False, error=str(exc), error_kind=type(exc).__name__)

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"success": True, "value": self.value}
        return {"success": False, "error": self.error}


def _select_fields(result: Any, fields: Any) -> Any:
    """Keep only the comma-separated `fields` of a dict result."""
    if not isinstance(result, dict) or not isinstance(fields, str):
        return result
    wanted = [f.strip() for f in fields.split(",") if f.strip()]
    if not wanted:
        return result
    return {k: v for k, v in result.items() if k in wanted}


async def dispatch(tool_name: str, arguments: Optional[Mapping[str, Any]], client: TelegramClient) -> Any:
    """Run one tool against `client` and return the decoded Bot API result."""
    handler = HANDLERS.get(tool_name)
    if handler is None:
        raise UnknownToolError(tool_name)

    arguments = dict(arguments or {})
    fields = arguments.get(FIELDS_ARGUMENT)
    bag = {k: v for k, v in arguments.items() if k not in RESERVED_ARGUMENTS}

    params, options = handler.split(tool_name, bag)
    result = await handler.call(client, params, options)
    return _select_fields(result, fields)


async def call_tool(
    tool_name: str,
    arguments: Optional[Mapping[str, Any]],
    *,
    default_token: Optional[str] = None,
    cache: Optional[ClientCache] = None,
) -> ToolCallResult:
    """Dispatch boundary: always returns a `ToolCallResult`, never raises a bridge error."""
    try:
        if tool_name not in HANDLERS:
            raise UnknownToolError(tool_name)
        token = resolve_credential(default_token, arguments)
        client = cache.get(token) if cache is not None else TelegramClient(token)
        value = await dispatch(tool_name, arguments, client)
    except BridgeError as e:
        logger.warning("Tool %s failed (%s): %s", tool_name, type(e).__name__, e)
        return ToolCallResult.failed(e)
    logger.info("Tool %s succeeded", tool_name)
    return ToolCallResult.ok(value)
