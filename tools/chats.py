from typing import Any

from tools.base import ToolAnnotations, ToolHandler
from utils.arguments import as_chat_id, as_int

LOOKUP = ToolAnnotations(read_only=True, open_world=True)


def get_tools() -> dict[str, Any]:
    return {
        "tg_get_chat": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id),),
                call=lambda client, params, options: client.get_chat(params["chat_id"]),
            ),
            "title": "Get Chat Info",
            "description": (
                "Get detailed information about a chat: title, description, type, member count, "
                "permissions, pinned message, etc."
            ),
            "annotations": LOOKUP,
            "input_schema": {
                "type": "object",
                "properties": {"chat_id": {"type": "string", "description": "Chat ID or @channel_username"}},
                "required": ["chat_id"],
            },
        },
        "tg_get_chat_member_count": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id),),
                call=lambda client, params, options: client.get_chat_member_count(params["chat_id"]),
            ),
            "title": "Get Chat Member Count",
            "description": "Get the number of members in a chat.",
            "annotations": LOOKUP,
            "input_schema": {
                "type": "object",
                "properties": {"chat_id": {"type": "string", "description": "Chat ID or @channel_username"}},
                "required": ["chat_id"],
            },
        },
        "tg_get_chat_member": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("user_id", as_int)),
                call=lambda client, params, options: client.get_chat_member(params["chat_id"], params["user_id"]),
            ),
            "title": "Get Chat Member",
            "description": (
                "Get information about a specific member: status (creator, administrator, member, "
                "restricted, left, kicked), permissions, and custom title."
            ),
            "annotations": LOOKUP,
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": {"type": "string", "description": "Chat ID or @channel_username"},
                    "user_id": {"type": "integer", "description": "Telegram user ID"},
                },
                "required": ["chat_id", "user_id"],
            },
        },
        "tg_ban_chat_member": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("user_id", as_int)),
                call=lambda client, params, options: client.ban_chat_member(
                    params["chat_id"], params["user_id"], options
                ),
            ),
            "title": "Ban Chat Member",
            "description": (
                "Ban a user from a group, supergroup, or channel. The user will be unable to return "
                "unless unbanned. Bot must be admin with ban permission."
            ),
            "annotations": ToolAnnotations(destructive=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": {"type": "string", "description": "Chat ID"},
                    "user_id": {"type": "integer", "description": "User ID to ban"},
                    "until_date": {
                        "type": "integer",
                        "description": "Unix timestamp for ban expiry (0 or omit for permanent)",
                    },
                    "revoke_messages": {
                        "type": "boolean",
                        "description": "Delete all messages from this user in the chat",
                    },
                },
                "required": ["chat_id", "user_id"],
            },
        },
        "tg_unban_chat_member": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("user_id", as_int)),
                call=lambda client, params, options: client.unban_chat_member(
                    params["chat_id"], params["user_id"], options
                ),
            ),
            "title": "Unban Chat Member",
            "description": (
                "Unban a previously banned user. The user is NOT added back automatically "
                "and must rejoin via invite link."
            ),
            "annotations": ToolAnnotations(destructive=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": {"type": "string", "description": "Chat ID"},
                    "user_id": {"type": "integer", "description": "User ID to unban"},
                    "only_if_banned": {
                        "type": "boolean",
                        "description": "Only unban if currently banned (default: false)",
                    },
                },
                "required": ["chat_id", "user_id"],
            },
        },
    }
