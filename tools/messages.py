"""Tools that send new messages (text, media, location, poll, contact)."""
from typing import Any

from tools.base import ToolAnnotations, ToolHandler
from utils.arguments import as_chat_id, as_list, as_number, as_str

CHAT_ID = {"type": "string", "description": "Chat ID (number) or @channel_username"}
CAPTION_PARSE_MODE = {"type": "string", "description": "Caption parse mode"}
REPLY_MARKUP = {"type": "object", "description": "Optional reply markup"}

# Sending always creates a new message, so none of these are idempotent
SEND = ToolAnnotations()


def _media_tool(kind: str, title: str, description: str, extra: dict[str, Any], send) -> dict[str, Any]:
    """Descriptor for the send<Media> family: chat_id + a URL/file_id under `kind`."""
    return {
        "handler": ToolHandler(
            required=(("chat_id", as_chat_id), (kind, as_str)),
            call=lambda client, params, options: send(client)(params["chat_id"], params[kind], options),
        ),
        "title": title,
        "description": description,
        "annotations": SEND,
        "input_schema": {
            "type": "object",
            "properties": {
                "chat_id": CHAT_ID,
                kind: {"type": "string", "description": f"{kind.capitalize()} URL or file_id"},
                **extra,
            },
            "required": ["chat_id", kind],
        },
    }


def get_tools() -> dict[str, Any]:
    return {
        "tg_send_message": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("text", as_str)),
                call=lambda client, params, options: client.send_message(params["chat_id"], params["text"], options),
            ),
            "title": "Send Message",
            "description": (
                "Send a text message to a chat. Supports Markdown, MarkdownV2, and HTML formatting. "
                "Can include inline keyboards via reply_markup."
            ),
            "annotations": SEND,
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": CHAT_ID,
                    "text": {"type": "string", "description": "Message text (1-4096 characters)"},
                    "parse_mode": {"type": "string", "description": '"Markdown", "MarkdownV2", or "HTML"'},
                    "reply_markup": {"type": "object", "description": "InlineKeyboardMarkup, ReplyKeyboardMarkup, etc."},
                    "reply_to_message_id": {"type": "integer", "description": "Message ID to reply to"},
                    "disable_notification": {"type": "boolean", "description": "Send silently (no notification sound)"},
                    "protect_content": {"type": "boolean", "description": "Prevent message from being forwarded/saved"},
                },
                "required": ["chat_id", "text"],
            },
        },
        "tg_send_photo": _media_tool(
            "photo",
            "Send Photo",
            "Send a photo to a chat. Provide a URL or file_id from a previously uploaded photo.",
            {
                "caption": {"type": "string", "description": "Photo caption (0-1024 characters)"},
                "parse_mode": CAPTION_PARSE_MODE,
                "reply_markup": REPLY_MARKUP,
                "reply_to_message_id": {"type": "integer", "description": "Message ID to reply to"},
            },
            lambda client: client.send_photo,
        ),
        "tg_send_document": _media_tool(
            "document",
            "Send Document",
            "Send a document/file to a chat. Provide a URL or file_id. Max 50MB for bots.",
            {
                "caption": {"type": "string", "description": "Document caption (0-1024 characters)"},
                "parse_mode": CAPTION_PARSE_MODE,
                "reply_markup": REPLY_MARKUP,
            },
            lambda client: client.send_document,
        ),
        "tg_send_video": _media_tool(
            "video",
            "Send Video",
            "Send a video to a chat. Provide a URL or file_id. Supports MPEG4 format, max 50MB.",
            {
                "caption": {"type": "string", "description": "Video caption"},
                "parse_mode": CAPTION_PARSE_MODE,
                "duration": {"type": "integer", "description": "Duration in seconds"},
                "width": {"type": "integer", "description": "Video width"},
                "height": {"type": "integer", "description": "Video height"},
            },
            lambda client: client.send_video,
        ),
        "tg_send_audio": _media_tool(
            "audio",
            "Send Audio",
            (
                "Send an audio file to a chat. Displayed as a music player. Provide a URL or file_id. "
                "Max 50MB, MP3/M4A format."
            ),
            {
                "caption": {"type": "string", "description": "Audio caption"},
                "parse_mode": CAPTION_PARSE_MODE,
                "duration": {"type": "integer", "description": "Duration in seconds"},
                "performer": {"type": "string", "description": "Performer name"},
                "title": {"type": "string", "description": "Track name"},
            },
            lambda client: client.send_audio,
        ),
        "tg_send_location": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("latitude", as_number), ("longitude", as_number)),
                call=lambda client, params, options: client.send_location(
                    params["chat_id"], params["latitude"], params["longitude"], options
                ),
            ),
            "title": "Send Location",
            "description": "Send a geographic location point to a chat.",
            "annotations": SEND,
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": CHAT_ID,
                    "latitude": {"type": "number", "description": "Latitude (-90 to 90)"},
                    "longitude": {"type": "number", "description": "Longitude (-180 to 180)"},
                    "reply_markup": REPLY_MARKUP,
                },
                "required": ["chat_id", "latitude", "longitude"],
            },
        },
        "tg_send_poll": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("question", as_str), ("options", as_list)),
                call=lambda client, params, options: client.send_poll(
                    params["chat_id"], params["question"], params["options"], options
                ),
            ),
            "title": "Send Poll",
            "description": (
                "Send a poll to a chat. Supports regular polls and quiz mode. "
                'For quiz mode, set type to "quiz" and provide correct_option_id.'
            ),
            "annotations": SEND,
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": CHAT_ID,
                    "question": {"type": "string", "description": "Poll question (1-300 characters)"},
                    "options": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Answer options (2-10 strings, each 1-100 chars)",
                    },
                    "is_anonymous": {"type": "boolean", "description": "Anonymous poll (default: true)"},
                    "type": {"type": "string", "description": '"regular" or "quiz"'},
                    "correct_option_id": {
                        "type": "integer",
                        "description": "Required for quiz: 0-based index of correct answer",
                    },
                    "allows_multiple_answers": {
                        "type": "boolean",
                        "description": "Allow multiple answers (regular polls only)",
                    },
                },
                "required": ["chat_id", "question", "options"],
            },
        },
        "tg_send_contact": {
            "handler": ToolHandler(
                required=(("chat_id", as_chat_id), ("phone_number", as_str), ("first_name", as_str)),
                call=lambda client, params, options: client.send_contact(
                    params["chat_id"], params["phone_number"], params["first_name"], options
                ),
            ),
            "title": "Send Contact",
            "description": "Send a phone contact card to a chat.",
            "annotations": SEND,
            "input_schema": {
                "type": "object",
                "properties": {
                    "chat_id": CHAT_ID,
                    "phone_number": {"type": "string", "description": "Contact phone number"},
                    "first_name": {"type": "string", "description": "Contact first name"},
                    "last_name": {"type": "string", "description": "Contact last name"},
                },
                "required": ["chat_id", "phone_number", "first_name"],
            },
        },
    }
