"""Credential resolution and per-credential client reuse."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from core.errors import MissingCredentialError
from core.telegram_client import TelegramClient

logger = logging.getLogger(__name__)

TOKEN_ARGUMENT = "TELEGRAM_BOT_TOKEN"


def resolve_credential(default_token: Optional[str], arguments: Optional[Mapping[str, Any]]) -> str:
    """Pick the bot token for a call: the server default first, then the argument bag."""
    if default_token:
        return default_token
    embedded = (arguments or {}).get(TOKEN_ARGUMENT)
    if isinstance(embedded, str) and embedded.strip():
        return embedded.strip()
    raise MissingCredentialError(TOKEN_ARGUMENT)


class ClientCache:
    """Holds the client for the most recently used token.

    A call under a different token replaces the cached client; clients keep no
    connections open, so the replaced one needs no cleanup.
    """

    def __init__(self, factory: Callable[[str], TelegramClient] = TelegramClient):
        self._factory = factory
        self._client: Optional[TelegramClient] = None

    def get(self, token: str) -> TelegramClient:
        if self._client is None or self._client.token != token:
            if self._client is not None:
                logger.info("Bot token changed; replacing cached Telegram client")
            self._client = self._factory(token)
        return self._client

    def invalidate(self) -> None:
        self._client = None
