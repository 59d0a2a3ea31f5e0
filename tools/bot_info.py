from typing import Any

from core.errors import InvalidArgumentsError
from tools.base import ToolAnnotations, ToolHandler
from utils.arguments import as_list, as_object

FIELDS_PROPERTY = {
    "type": "string",
    "description": 'Comma-separated list of fields to include in the response (e.g. "id,username,first_name")',
}


def _set_my_commands(client, params, options):
    scope = options.get("scope")
    if scope is not None:
        try:
            scope = as_object(scope)
        except ValueError as e:
            raise InvalidArgumentsError("tg_set_my_commands", "scope", str(e)) from e
    return client.set_my_commands(params["commands"], scope, options.get("language_code"))


def get_tools() -> dict[str, Any]:
    return {
        "tg_get_me": {
            "handler": ToolHandler(required=(), call=lambda client, params, options: client.get_me()),
            "title": "Get Bot Info",
            "description": (
                "Get basic information about the bot: id, username, first_name, can_join_groups, "
                "can_read_all_group_messages, supports_inline_queries."
            ),
            "annotations": ToolAnnotations(read_only=True, open_world=True),
            "input_schema": {
                "type": "object",
                "properties": {"_fields": FIELDS_PROPERTY},
            },
        },
        "tg_set_my_commands": {
            "handler": ToolHandler(required=(("commands", as_list),), call=_set_my_commands),
            "title": "Set Bot Commands",
            "description": (
                'Set the list of bot commands shown in the Telegram chat menu. Each command has a "command" '
                '(1-32 chars, lowercase a-z, 0-9, _) and a "description" (1-256 chars). Max 100 commands.'
            ),
            "annotations": ToolAnnotations(idempotent=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "commands": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "properties": {
                                "command": {"type": "string", "description": "Command text without leading /"},
                                "description": {"type": "string", "description": "Description of the command"},
                            },
                            "required": ["command", "description"],
                        },
                        "description": "Array of BotCommand objects",
                    },
                    "scope": {"type": "object", "description": 'Optional scope e.g. {"type":"all_private_chats"}'},
                    "language_code": {"type": "string", "description": "Two-letter ISO 639-1 language code"},
                },
                "required": ["commands"],
            },
        },
    }
