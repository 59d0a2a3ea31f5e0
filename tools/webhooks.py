from typing import Any

from tools.base import ToolAnnotations, ToolHandler
from utils.arguments import as_str


def _delete_webhook(client, params, options):
    # Only drop_pending_updates is meaningful here; anything else is ignored
    if options.get("drop_pending_updates") is None:
        return client.delete_webhook()
    return client.delete_webhook({"drop_pending_updates": options["drop_pending_updates"]})


def get_tools() -> dict[str, Any]:
    return {
        "tg_set_webhook": {
            "handler": ToolHandler(
                required=(("url", as_str),),
                call=lambda client, params, options: client.set_webhook(params["url"], options),
            ),
            "title": "Set Webhook",
            "description": (
                "Set a webhook URL for receiving Telegram updates. Telegram sends POST requests with JSON "
                "Update objects to this URL. Supported ports: 443, 80, 88, 8443."
            ),
            "annotations": ToolAnnotations(idempotent=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "url": {"type": "string", "description": "HTTPS URL for receiving updates"},
                    "max_connections": {
                        "type": "integer",
                        "description": "Max simultaneous connections (1-100, default 40)",
                    },
                    "allowed_updates": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": 'Update types to receive, e.g. ["message","callback_query"]',
                    },
                    "secret_token": {
                        "type": "string",
                        "description": "Secret token for X-Telegram-Bot-Api-Secret-Token header (1-256 chars)",
                    },
                },
                "required": ["url"],
            },
        },
        "tg_delete_webhook": {
            "handler": ToolHandler(required=(), call=_delete_webhook),
            "title": "Delete Webhook",
            "description": "Remove the webhook integration. After this, you can use getUpdates for polling.",
            "annotations": ToolAnnotations(destructive=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "drop_pending_updates": {"type": "boolean", "description": "Drop all pending updates"},
                },
            },
        },
        "tg_get_webhook_info": {
            "handler": ToolHandler(required=(), call=lambda client, params, options: client.get_webhook_info()),
            "title": "Get Webhook Info",
            "description": (
                "Get current webhook status: URL, pending update count, last error date/message, "
                "max connections, and allowed update types."
            ),
            "annotations": ToolAnnotations(read_only=True, open_world=True),
            "input_schema": {
                "type": "object",
                "properties": {
                    "_fields": {
                        "type": "string",
                        "description": (
                            "Comma-separated list of fields to include in the response "
                            '(e.g. "url,pending_update_count")'
                        ),
                    },
                },
            },
        },
    }
