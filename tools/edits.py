from typing import Any

from tools.base import ToolAnnotations, ToolHandler
from utils.arguments import as_chat_id, as_int, as_str


def get_tools() -> dict[str, Any]:
    return {
        "tg_edit_message_text": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("message_id", as_int), ("text", as_str)),
                call=lambda client, params, options: client.edit_message_text(
                    params["chat_id"], params["message_id"], params["text"], options
                ),
            ),
            "title": "Edit Message Text",
            "description": "Edit the text of a previously sent message. The bot must be the author of the message.",
            "annotations": ToolAnnotations(idempotent=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": {"type": "string", "description": "Chat ID"},
                    "message_id": {"type": "integer", "description": "Message ID to edit"},
                    "text": {"type": "string", "description": "New text (1-4096 characters)"},
                    "parse_mode": {"type": "string", "description": "Parse mode for new text"},
                    "reply_markup": {"type": "object", "description": "New inline keyboard markup"},
                },
                "required": ["chat_id", "message_id", "text"],
            },
        },
        "tg_edit_message_caption": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("message_id", as_int)),
                call=lambda client, params, options: client.edit_message_caption(
                    params["chat_id"], params["message_id"], options
                ),
            ),
            "title": "Edit Message Caption",
            "description": "Edit the caption of a previously sent media message (photo, video, document, audio).",
            "annotations": ToolAnnotations(idempotent=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": {"type": "string", "description": "Chat ID"},
                    "message_id": {"type": "integer", "description": "Message ID to edit"},
                    "caption": {"type": "string", "description": "New caption (0-1024 characters)"},
                    "parse_mode": {"type": "string", "description": "Parse mode for caption"},
                    "reply_markup": {"type": "object", "description": "New inline keyboard markup"},
                },
                "required": ["chat_id", "message_id"],
            },
        },
        "tg_delete_message": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("message_id", as_int)),
                call=lambda client, params, options: client.delete_message(params["chat_id"], params["message_id"]),
            ),
            "title": "Delete Message",
            "description": (
                "Delete a message. Bot must have delete permission in group chats. "
                "Messages older than 48 hours cannot be deleted."
            ),
            "annotations": ToolAnnotations(destructive=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": {"type": "string", "description": "Chat ID"},
                    "message_id": {"type": "integer", "description": "Message ID to delete"},
                },
                "required": ["chat_id", "message_id"],
            },
        },
    }
