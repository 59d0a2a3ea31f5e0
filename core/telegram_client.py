"""Telegram Bot API client.

The bot token is part of the URL path (`https://api.telegram.org/bot<token>/<method>`)
and every response is an `{ok, result | error_code + description}` envelope that
`invoke` unwraps. Each public method is one round trip built on `invoke`.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

import httpx

from core.errors import TransportError
from core.logging_config import redact_token
from utils import DEFAULT_API_URL, file_url, method_url, unwrap_envelope

logger = logging.getLogger(__name__)

Options = Optional[Mapping[str, Any]]
ChatId = int | str


def _merge(required: dict[str, Any], options: Options) -> dict[str, Any]:
    """Build a request body; required parameters win over same-named option keys."""
    body = dict(required)
    if options:
        body.update({k: v for k, v in options.items() if k not in required})
    return body


class TelegramClient:
    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def token(self) -> str:
        return self._token

    async def invoke(self, method: str, body: Optional[Mapping[str, Any]] = None) -> Any:
        """Call a Bot API method and return the envelope's `result`.

        With no `body` the method is called with a bare GET; otherwise the body is
        POSTed as JSON. Raises `RemoteApiError` for `ok: false` and
        `TransportError` when Telegram cannot be reached or does not answer
        with an envelope.
        """
        url = method_url(self.base_url, self._token, method)
        content = None
        if body is not None:
            try:
                content = json.dumps(dict(body), allow_nan=False)
            except (TypeError, ValueError) as e:
                raise TransportError(f"Request body for {method} is not valid JSON: {e}") from e

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                if content is None:
                    request = client.build_request("GET", url)
                else:
                    request = client.build_request(
                        "POST", url, content=content, headers={"Content-Type": "application/json"}
                    )
            except httpx.InvalidURL as e:
                logger.warning("Invalid request URL for %s", method)
                raise TransportError(f"Invalid request URL for {method}; check the bot token") from e
            try:
                response = await client.send(request)
            except httpx.TimeoutException as e:
                logger.warning("Timed out calling %s: %s", redact_token(url), e)
                raise TransportError(f"Request to Telegram timed out ({method})") from e
            except httpx.HTTPError as e:
                logger.warning("HTTP error calling %s: %s", redact_token(url), e)
                raise TransportError(f"Could not reach Telegram ({method}): {redact_token(str(e))}") from e

        logger.debug("%s -> HTTP %s", redact_token(url), response.status_code)
        return unwrap_envelope(response.text, response.status_code)

    # ========== Bot info ==========

    async def get_me(self) -> dict[str, Any]:
        return await self.invoke("getMe")

    async def set_my_commands(
        self,
        commands: list[dict[str, Any]],
        scope: Optional[Mapping[str, Any]] = None,
        language_code: Optional[str] = None,
    ) -> bool:
        body: dict[str, Any] = {"commands": commands}
        if scope:
            body["scope"] = scope
        if language_code:
            body["language_code"] = language_code
        return await self.invoke("setMyCommands", body)

    # ========== Send messages ==========

    async def send_message(self, chat_id: ChatId, text: str, options: Options = None) -> dict[str, Any]:
        return await self.invoke("sendMessage", _merge({"chat_id": chat_id, "text": text}, options))

    async def send_photo(self, chat_id: ChatId, photo: str, options: Options = None) -> dict[str, Any]:
        return await self.invoke("sendPhoto", _merge({"chat_id": chat_id, "photo": photo}, options))

    async def send_document(self, chat_id: ChatId, document: str, options: Options = None) -> dict[str, Any]:
        return await self.invoke("sendDocument", _merge({"chat_id": chat_id, "document": document}, options))

    async def send_video(self, chat_id: ChatId, video: str, options: Options = None) -> dict[str, Any]:
        return await self.invoke("sendVideo", _merge({"chat_id": chat_id, "video": video}, options))

    async def send_audio(self, chat_id: ChatId, audio: str, options: Options = None) -> dict[str, Any]:
        return await self.invoke("sendAudio", _merge({"chat_id": chat_id, "audio": audio}, options))

    async def send_location(
        self, chat_id: ChatId, latitude: float, longitude: float, options: Options = None
    ) -> dict[str, Any]:
        required = {"chat_id": chat_id, "latitude": latitude, "longitude": longitude}
        return await self.invoke("sendLocation", _merge(required, options))

    async def send_poll(
        self, chat_id: ChatId, question: str, poll_options: list[Any], options: Options = None
    ) -> dict[str, Any]:
        # `options` is the Bot API's name for the answer list, hence `poll_options` here
        required = {"chat_id": chat_id, "question": question, "options": poll_options}
        return await self.invoke("sendPoll", _merge(required, options))

    async def send_contact(
        self, chat_id: ChatId, phone_number: str, first_name: str, options: Options = None
    ) -> dict[str, Any]:
        required = {"chat_id": chat_id, "phone_number": phone_number, "first_name": first_name}
        return await self.invoke("sendContact", _merge(required, options))

    # ========== Edit / delete messages ==========

    async def edit_message_text(
        self, chat_id: ChatId, message_id: int, text: str, options: Options = None
    ) -> dict[str, Any] | bool:
        required = {"chat_id": chat_id, "message_id": message_id, "text": text}
        return await self.invoke("editMessageText", _merge(required, options))

    async def edit_message_caption(
        self, chat_id: ChatId, message_id: int, options: Options = None
    ) -> dict[str, Any] | bool:
        return await self.invoke(
            "editMessageCaption", _merge({"chat_id": chat_id, "message_id": message_id}, options)
        )

    async def delete_message(self, chat_id: ChatId, message_id: int) -> bool:
        return await self.invoke("deleteMessage", {"chat_id": chat_id, "message_id": message_id})

    # ========== Chat management ==========

    async def get_chat(self, chat_id: ChatId) -> dict[str, Any]:
        return await self.invoke("getChat", {"chat_id": chat_id})

    async def get_chat_member_count(self, chat_id: ChatId) -> int:
        return await self.invoke("getChatMemberCount", {"chat_id": chat_id})

    async def get_chat_member(self, chat_id: ChatId, user_id: int) -> dict[str, Any]:
        return await self.invoke("getChatMember", {"chat_id": chat_id, "user_id": user_id})

    async def ban_chat_member(self, chat_id: ChatId, user_id: int, options: Options = None) -> bool:
        return await self.invoke("banChatMember", _merge({"chat_id": chat_id, "user_id": user_id}, options))

    async def unban_chat_member(self, chat_id: ChatId, user_id: int, options: Options = None) -> bool:
        return await self.invoke("unbanChatMember", _merge({"chat_id": chat_id, "user_id": user_id}, options))

    # ========== Webhooks ==========

    async def set_webhook(self, url: str, options: Options = None) -> bool:
        return await self.invoke("setWebhook", _merge({"url": url}, options))

    async def delete_webhook(self, options: Options = None) -> bool:
        return await self.invoke("deleteWebhook", dict(options or {}))

    async def get_webhook_info(self) -> dict[str, Any]:
        return await self.invoke("getWebhookInfo")

    # ========== Callbacks & files ==========

    async def answer_callback_query(self, callback_query_id: str, options: Options = None) -> bool:
        return await self.invoke(
            "answerCallbackQuery", _merge({"callback_query_id": callback_query_id}, options)
        )

    async def get_file(self, file_id: str) -> dict[str, Any]:
        """Return the File object plus a ready-to-use `download_url` ("" when Telegram gave no path)."""
        result = await self.invoke("getFile", {"file_id": file_id})
        file_info = dict(result) if isinstance(result, Mapping) else {}
        file_path = file_info.get("file_path")
        file_info["download_url"] = file_url(self.base_url, self._token, file_path) if file_path else ""
        return file_info

    async def get_user_profile_photos(self, user_id: int, options: Options = None) -> dict[str, Any]:
        return await self.invoke("getUserProfilePhotos", _merge({"user_id": user_id}, options))

    # ========== Pins & invite links ==========

    async def pin_chat_message(self, chat_id: ChatId, message_id: int, options: Options = None) -> bool:
        return await self.invoke(
            "pinChatMessage", _merge({"chat_id": chat_id, "message_id": message_id}, options)
        )

    async def unpin_chat_message(self, chat_id: ChatId, message_id: Optional[int] = None) -> bool:
        body: dict[str, Any] = {"chat_id": chat_id}
        if message_id is not None:
            body["message_id"] = message_id
        return await self.invoke("unpinChatMessage", body)

    async def create_chat_invite_link(self, chat_id: ChatId, options: Options = None) -> dict[str, Any]:
        return await self.invoke("createChatInviteLink", _merge({"chat_id": chat_id}, options))
