"""Dispatch routing, argument handling, credential resolution and the error boundary."""

import asyncio
import json

import httpx
import pytest

from core.client_cache import ClientCache, resolve_credential
from core.dispatcher import ToolCallResult, call_tool, dispatch
from core.errors import InvalidArgumentsError, MissingCredentialError, UnknownToolError
from core.telegram_client import TelegramClient
from tests.conftest import BASE_URL
from tools.registry import HANDLERS, TOOLS


@pytest.mark.anyio
class TestDispatch:
    @pytest.mark.parametrize("name", ["", "tg_unknown", "TG_SEND_MESSAGE", "tg_send_message ", "sendMessage"])
    async def test_unknown_tool_is_rejected_by_name(self, client, fake_telegram, name):
        with pytest.raises(UnknownToolError) as exc_info:
            await dispatch(name, {"chat_id": "1", "text": "hi"}, client)
        assert exc_info.value.tool_name == name
        assert str(exc_info.value) == f"Unknown tool: {name}"
        assert fake_telegram.call_count == 0

    async def test_send_message_passes_extra_fields_through(self, client, fake_telegram):
        fake_telegram.reply("sendMessage", {"message_id": 1})
        await dispatch("tg_send_message", {"chat_id": "1", "text": "hi", "parse_mode": "HTML"}, client)
        assert fake_telegram.last_body() == {"chat_id": "1", "text": "hi", "parse_mode": "HTML"}

    async def test_unlisted_extra_fields_are_forwarded_unchanged(self, client, fake_telegram):
        fake_telegram.reply("sendPhoto", {"message_id": 2})
        reply_markup = {"inline_keyboard": [[{"text": "Open", "url": "https://example.org"}]]}
        await dispatch(
            "tg_send_photo",
            {"chat_id": 7, "photo": "file-1", "reply_markup": reply_markup, "has_spoiler": True},
            client,
        )
        assert fake_telegram.last_body() == {
            "chat_id": 7,
            "photo": "file-1",
            "reply_markup": reply_markup,
            "has_spoiler": True,
        }

    async def test_missing_required_field_fails_before_network(self, client, fake_telegram):
        with pytest.raises(InvalidArgumentsError) as exc_info:
            await dispatch("tg_send_message", {"chat_id": "1"}, client)
        assert exc_info.value.field == "text"
        assert fake_telegram.call_count == 0

    @pytest.mark.parametrize(
        "tool_name, arguments, field",
        [
            ("tg_delete_message", {"chat_id": "1", "message_id": "abc"}, "message_id"),
            ("tg_send_poll", {"chat_id": "1", "question": "Q", "options": "a,b"}, "options"),
            ("tg_send_location", {"chat_id": "1", "latitude": True, "longitude": 2}, "latitude"),
            ("tg_get_chat", {"chat_id": {"id": 1}}, "chat_id"),
            ("tg_unpin_chat_message", {"chat_id": "1", "message_id": "latest"}, "message_id"),
        ],
    )
    async def test_wrongly_shaped_fields_are_rejected(self, client, fake_telegram, tool_name, arguments, field):
        with pytest.raises(InvalidArgumentsError) as exc_info:
            await dispatch(tool_name, arguments, client)
        assert exc_info.value.field == field
        assert fake_telegram.call_count == 0

    async def test_integral_values_are_coerced(self, client, fake_telegram):
        fake_telegram.reply("deleteMessage", True)
        await dispatch("tg_delete_message", {"chat_id": -100123, "message_id": "42"}, client)
        assert fake_telegram.last_body() == {"chat_id": -100123, "message_id": 42}

    async def test_fixed_parameter_tools_ignore_extra_keys(self, client, fake_telegram):
        fake_telegram.reply("getChat", {"id": 1})
        await dispatch("tg_get_chat", {"chat_id": "1", "unexpected": "x"}, client)
        assert fake_telegram.last_body() == {"chat_id": "1"}

    async def test_token_argument_is_never_forwarded(self, client, fake_telegram):
        fake_telegram.reply("sendMessage", {"message_id": 1})
        await dispatch("tg_send_message", {"chat_id": "1", "text": "hi", "TELEGRAM_BOT_TOKEN": "secret"}, client)
        assert "TELEGRAM_BOT_TOKEN" not in fake_telegram.last_body()

    async def test_fields_selects_result_keys(self, client, fake_telegram):
        fake_telegram.reply("getMe", {"id": 1, "username": "demo_bot", "first_name": "Demo", "is_bot": True})
        result = await dispatch("tg_get_me", {"_fields": "id, username"}, client)
        assert result == {"id": 1, "username": "demo_bot"}
        assert fake_telegram.requests[-1].method == "GET"

    async def test_set_my_commands_reads_known_optionals(self, client, fake_telegram):
        fake_telegram.reply("setMyCommands", True)
        commands = [{"command": "help", "description": "Show help"}]
        await dispatch(
            "tg_set_my_commands",
            {"commands": commands, "language_code": "en", "ignored": 1},
            client,
        )
        assert fake_telegram.last_body() == {"commands": commands, "language_code": "en"}

    async def test_set_my_commands_forwards_object_scope(self, client, fake_telegram):
        fake_telegram.reply("setMyCommands", True)
        commands = [{"command": "help", "description": "Show help"}]
        await dispatch("tg_set_my_commands", {"commands": commands, "scope": {"type": "all_private_chats"}}, client)
        assert fake_telegram.last_body() == {"commands": commands, "scope": {"type": "all_private_chats"}}

    async def test_set_my_commands_rejects_non_object_scope(self, client, fake_telegram):
        commands = [{"command": "help", "description": "Show help"}]
        with pytest.raises(InvalidArgumentsError) as exc_info:
            await dispatch("tg_set_my_commands", {"commands": commands, "scope": "all_private_chats"}, client)
        assert exc_info.value.field == "scope"
        assert fake_telegram.call_count == 0

    async def test_delete_webhook_forwards_drop_pending_updates_only(self, client, fake_telegram):
        fake_telegram.reply("deleteWebhook", True)
        await dispatch("tg_delete_webhook", {"drop_pending_updates": True, "other": 1}, client)
        assert fake_telegram.last_body() == {"drop_pending_updates": True}

    async def test_get_file_returns_download_url(self, client, fake_telegram):
        fake_telegram.reply("getFile", {"file_id": "f", "file_path": "docs/a.pdf"})
        result = await dispatch("tg_get_file", {"file_id": "f"}, client)
        assert result["download_url"] == f"{BASE_URL}/file/botT/docs/a.pdf"

    @pytest.mark.parametrize("tool", TOOLS, ids=lambda t: t.name)
    async def test_every_tool_sends_its_required_fields(self, tool):
        # Build a minimal valid argument bag from the schema and check it reaches Telegram
        samples = {"string": "1", "integer": 1, "number": 1.5, "boolean": True, "array": ["a", "b"], "object": {}}
        properties = tool.input_schema["properties"]
        arguments = {name: samples[properties[name]["type"]] for name in tool.required}
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(json.loads(request.content) if request.content else {})
            return httpx.Response(200, json={"ok": True, "result": {"file_path": "x"}})

        probe = TelegramClient("T", base_url=BASE_URL, transport=httpx.MockTransport(handler))
        await dispatch(tool.name, arguments, probe)
        assert len(bodies) == 1
        assert set(HANDLERS[tool.name].required_names) <= set(bodies[0])


class TestCredentials:
    def test_default_token_wins(self):
        assert resolve_credential("DEFAULT", {"TELEGRAM_BOT_TOKEN": "ARG"}) == "DEFAULT"

    def test_argument_token_is_used_without_default(self):
        assert resolve_credential(None, {"TELEGRAM_BOT_TOKEN": "ARG"}) == "ARG"

    @pytest.mark.parametrize("arguments", [{}, {"TELEGRAM_BOT_TOKEN": ""}, {"TELEGRAM_BOT_TOKEN": 123}, None])
    def test_missing_token_raises(self, arguments):
        with pytest.raises(MissingCredentialError, match="TELEGRAM_BOT_TOKEN is required"):
            resolve_credential(None, arguments)


class TestClientCache:
    def test_same_token_reuses_client(self):
        cache = ClientCache()
        assert cache.get("A") is cache.get("A")

    def test_new_token_replaces_client(self):
        cache = ClientCache()
        first = cache.get("A")
        second = cache.get("B")
        assert second is not first
        assert second.token == "B"
        assert cache.get("B") is second

    def test_invalidate(self):
        cache = ClientCache()
        first = cache.get("A")
        cache.invalidate()
        assert cache.get("A") is not first


@pytest.mark.anyio
class TestCallTool:
    @pytest.fixture
    def cache(self, make_client):
        return ClientCache(make_client)

    async def test_success_result(self, cache, fake_telegram):
        fake_telegram.reply("getChatMemberCount", 12)
        result = await call_tool("tg_get_chat_member_count", {"chat_id": "1"}, default_token="T", cache=cache)
        assert result == ToolCallResult(success=True, value=12)
        assert result.to_dict() == {"success": True, "value": 12}

    async def test_default_token_is_used_over_argument(self, cache, fake_telegram):
        fake_telegram.reply("getMe", {"id": 1})
        await call_tool("tg_get_me", {"TELEGRAM_BOT_TOKEN": "ARG"}, default_token="DEFAULT", cache=cache)
        assert fake_telegram.requests[-1].url.path == "/botDEFAULT/getMe"

    async def test_argument_token_is_used_without_default(self, cache, fake_telegram):
        fake_telegram.reply("getMe", {"id": 1})
        await call_tool("tg_get_me", {"TELEGRAM_BOT_TOKEN": "ARG"}, cache=cache)
        assert fake_telegram.requests[-1].url.path == "/botARG/getMe"

    async def test_missing_token_makes_no_network_call(self, cache, fake_telegram):
        result = await call_tool("tg_send_message", {"chat_id": "1", "text": "hi"}, cache=cache)
        assert result.success is False
        assert result.error == "TELEGRAM_BOT_TOKEN is required"
        assert result.error_kind == "MissingCredentialError"
        assert fake_telegram.call_count == 0

    async def test_unknown_tool_becomes_failure(self, cache, fake_telegram):
        result = await call_tool("tg_nope", {}, default_token="T", cache=cache)
        assert result.to_dict() == {"success": False, "error": "Unknown tool: tg_nope"}
        assert result.error_kind == "UnknownToolError"
        assert fake_telegram.call_count == 0

    async def test_remote_error_becomes_failure(self, cache, fake_telegram):
        fake_telegram.fail("banChatMember", 403, "Forbidden")
        result = await call_tool("tg_ban_chat_member", {"chat_id": "1", "user_id": 2}, default_token="T", cache=cache)
        assert result.success is False
        assert result.error == "Telegram API Error (403): Forbidden"
        assert result.error_kind == "RemoteApiError"

    async def test_transport_error_is_distinct_from_remote_error(self, cache, fake_telegram):
        fake_telegram.raise_error("getChat", httpx.ConnectError("connection refused"))
        result = await call_tool("tg_get_chat", {"chat_id": "1"}, default_token="T", cache=cache)
        assert result.success is False
        assert result.error_kind == "TransportError"

    async def test_invalid_arguments_become_failure(self, cache, fake_telegram):
        result = await call_tool("tg_get_chat_member", {"chat_id": "1"}, default_token="T", cache=cache)
        assert result.error_kind == "InvalidArgumentsError"
        assert "user_id" in result.error

    async def test_identical_read_only_calls_give_identical_results(self, cache, fake_telegram):
        fake_telegram.reply("getChat", {"id": 1, "type": "group", "title": "Team"})
        first = await call_tool("tg_get_chat", {"chat_id": "1"}, default_token="T", cache=cache)
        second = await call_tool("tg_get_chat", {"chat_id": "1"}, default_token="T", cache=cache)
        assert first == second

    async def test_concurrent_calls_under_different_tokens(self, cache, fake_telegram):
        fake_telegram.reply("getMe", {"id": 1})
        results = await asyncio.gather(
            call_tool("tg_get_me", {"TELEGRAM_BOT_TOKEN": "A"}, cache=cache),
            call_tool("tg_get_me", {"TELEGRAM_BOT_TOKEN": "B"}, cache=cache),
        )
        assert all(r.success for r in results)
        assert sorted(r.url.path for r in fake_telegram.requests) == ["/botA/getMe", "/botB/getMe"]

    @pytest.mark.parametrize("latitude", ["nan", "inf", float("-inf")])
    async def test_non_finite_numbers_become_failure(self, cache, fake_telegram, latitude):
        result = await call_tool(
            "tg_send_location",
            {"chat_id": "1", "latitude": latitude, "longitude": 2},
            default_token="T",
            cache=cache,
        )
        assert result.success is False
        assert result.error_kind == "InvalidArgumentsError"
        assert "latitude" in result.error
        assert fake_telegram.call_count == 0

    async def test_unencodable_option_becomes_failure(self, cache, fake_telegram):
        result = await call_tool(
            "tg_send_message",
            {"chat_id": "1", "text": "hi", "reply_to_message_id": float("nan")},
            default_token="T",
            cache=cache,
        )
        assert result.success is False
        assert result.error_kind == "TransportError"
        assert fake_telegram.call_count == 0

    async def test_malformed_token_becomes_failure_without_leaking_it(self, cache, fake_telegram):
        result = await call_tool("tg_get_me", {"TELEGRAM_BOT_TOKEN": "12:AB\ncd"}, cache=cache)
        assert result.success is False
        assert result.error_kind == "TransportError"
        assert "12:AB" not in result.error
        assert fake_telegram.call_count == 0
