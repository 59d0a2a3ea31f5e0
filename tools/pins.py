from typing import Any

from core.errors import InvalidArgumentsError
from tools.base import ToolAnnotations, ToolHandler
from utils.arguments import as_chat_id, as_int


def _unpin(client, params, options):
    message_id = options.get("message_id")
    if message_id is not None:
        try:
            message_id = as_int(message_id)
        except ValueError as e:
            raise InvalidArgumentsError("tg_unpin_chat_message", "message_id", str(e)) from e
    return client.unpin_chat_message(params["chat_id"], message_id)


def get_tools() -> dict[str, Any]:
    return {
        "tg_pin_chat_message": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("message_id", as_int)),
                call=lambda client, params, options: client.pin_chat_message(
                    params["chat_id"], params["message_id"], options
                ),
            ),
            "title": "Pin Chat Message",
            "description": (
                "Pin a message in a chat. Bot must have pin_messages admin permission in groups/supergroups."
            ),
            "annotations": ToolAnnotations(),
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": {"type": "string", "description": "Chat ID"},
                    "message_id": {"type": "integer", "description": "Message ID to pin"},
                    "disable_notification": {"type": "boolean", "description": "Pin silently (no notification)"},
                },
                "required": ["chat_id", "message_id"],
            },
        },
        "tg_unpin_chat_message": {
            "handler": ToolHandler(required=(("chat_id", as_chat_id),), call=_unpin),
            "title": "Unpin Chat Message",
            "description": (
                "Unpin a message in a chat. If message_id is not provided, unpins the most recent pinned message."
            ),
            "annotations": ToolAnnotations(destructive=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": {"type": "string", "description": "Chat ID"},
                    "message_id": {"type": "integer", "description": "Message ID to unpin (omit to unpin latest)"},
                },
                "required": ["chat_id"],
            },
        },
        "tg_create_chat_invite_link": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id),),
                call=lambda client, params, options: client.create_chat_invite_link(params["chat_id"], options),
            ),
            "title": "Create Chat Invite Link",
            "description": "Create an additional invite link for a chat. Bot must be admin with invite_users permission.",
            "annotations": ToolAnnotations(),
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": {"type": "string", "description": "Chat ID"},
                    "name": {"type": "string", "description": "Invite link name (0-32 chars)"},
                    "expire_date": {"type": "integer", "description": "Unix timestamp when the link expires"},
                    "member_limit": {
                        "type": "integer",
                        "description": "Max users that can join via this link (1-99999)",
                    },
                },
                "required": ["chat_id"],
            },
        },
    }
