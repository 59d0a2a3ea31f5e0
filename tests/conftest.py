"""Shared fixtures: a fake Bot API backend served through httpx.MockTransport."""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from core.telegram_client import TelegramClient

BASE_URL = "https://api.telegram.org"


class FakeTelegram:
    """Records every request and answers with a canned envelope per Bot API method."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.responses: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}

    def reply(self, method: str, result: Any = True) -> None:
        self.responses[method] = lambda request: httpx.Response(200, json={"ok": True, "result": result})

    def fail(self, method: str, code: int, description: str) -> None:
        self.responses[method] = lambda request: httpx.Response(
            code, json={"ok": False, "error_code": code, "description": description}
        )

    def raw(self, method: str, status: int, body: str) -> None:
        self.responses[method] = lambda request: httpx.Response(status, text=body)

    def raise_error(self, method: str, exc: Exception) -> None:
        def _raise(request: httpx.Request) -> httpx.Response:
            raise exc

        self.responses[method] = _raise

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.url.path.rsplit("/", 1)[-1]
        responder = self.responses.get(method)
        if responder is None:
            return httpx.Response(404, json={"ok": False, "error_code": 404, "description": "Not Found"})
        return responder(request)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def last_body(self) -> Optional[Dict[str, Any]]:
        request = self.requests[-1]
        if not request.content:
            return None
        return json.loads(request.content)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def fake_telegram() -> FakeTelegram:
    return FakeTelegram()


@pytest.fixture
def make_client(fake_telegram: FakeTelegram) -> Callable[[str], TelegramClient]:
    def _make(token: str = "T") -> TelegramClient:
        return TelegramClient(token, base_url=BASE_URL, transport=httpx.MockTransport(fake_telegram.handler))

    return _make


@pytest.fixture
def client(make_client) -> TelegramClient:
    return make_client("T")
