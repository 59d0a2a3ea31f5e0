"""Error types raised between the Telegram client and the tool dispatcher.

Every error the bridge raises derives from `BridgeError` so the dispatch
boundary can turn all of them into a failed tool result with one `except`.
"""
from typing import Optional


class BridgeError(Exception):
    """Base class for failures surfaced to the tool caller."""


class RemoteApiError(BridgeError):
    """Telegram answered with `ok: false`."""

    def __init__(self, code: Optional[int], message: str):
        self.code = code
        self.message = message
        super().__init__(f"Telegram API Error ({code}): {message}")


class TransportError(BridgeError):
    """The platform could not be reached or answered with something that is not an envelope."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UnknownToolError(BridgeError):
    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class MissingCredentialError(BridgeError):
    def __init__(self, key: str = "TELEGRAM_BOT_TOKEN"):
        self.key = key
        super().__init__(f"{key} is required")


class InvalidArgumentsError(BridgeError):
    """A required argument is missing or has the wrong shape."""

    def __init__(self, tool_name: str, field: str, reason: str):
        self.tool_name = tool_name
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid arguments for {tool_name}: '{field}' {reason}")
