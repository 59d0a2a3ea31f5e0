"""Callback query answers and file / profile photo lookups."""
from typing import Any

from tools.base import ToolAnnotations, ToolHandler
from utils.arguments import as_int, as_str


def get_tools() -> dict[str, Any]:
    return {
        "tg_answer_callback_query": {
            "handler": ToolHandler(
                required=(("callback_query_id", as_str),),
                call=lambda client, params, options: client.answer_callback_query(
                    params["callback_query_id"], options
                ),
            ),
            "title": "Answer Callback Query",
            "description": (
                "Answer a callback query from an inline keyboard button press. "
                "Must be called to stop the loading indicator on the button."
            ),
            "annotations": ToolAnnotations(),
            "input_schema": {
                "type": "object",
                "properties": {
                    "callback_query_id": {"type": "string", "description": "Callback query ID from the update"},
                    "text": {"type": "string", "description": "Notification text (0-200 chars)"},
                    "show_alert": {
                        "type": "boolean",
                        "description": "Show as alert popup instead of notification at top",
                    },
                },
                "required": ["callback_query_id"],
            },
        },
        "tg_get_file": {
            "handler": ToolHandler(
                required=(("file_id", as_str),),
                call=lambda client, params, options: client.get_file(params["file_id"]),
            ),
            "title": "Get File",
            "description": (
                "Get file info and download URL. Returns file_id, file_size, file_path, "
                "and a ready-to-use download_url. Files up to 20MB."
            ),
            "annotations": ToolAnnotations(read_only=True, open_world=True),
            "input_schema": {
                "type": "object",
                "properties": {"file_id": {"type": "string", "description": "File identifier from a message"}},
                "required": ["file_id"],
            },
        },
        "tg_get_user_profile_photos": {
            "handler": ToolHandler(
                required=(("user_id", as_int),),
                call=lambda client, params, options: client.get_user_profile_photos(params["user_id"], options),
            ),
            "title": "Get User Profile Photos",
            "description": "Get a list of profile photos for a user.",
            "annotations": ToolAnnotations(read_only=True, open_world=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "user_id": {"type": "integer", "description": "Telegram user ID"},
                    "offset": {"type": "integer", "description": "Photo offset for pagination"},
                    "limit": {"type": "integer", "description": "Max photos to return (1-100, default 100)"},
                },
                "required": ["user_id"],
            },
        },
    }
