"""Shape checks for loosely typed tool arguments.

Each caster takes the raw JSON value from the tool call and returns the value
in the shape the Bot API expects, or raises `ValueError` with a short reason.
They check shape only; ranges, enums and lengths are left to Telegram.
"""
from __future__ import annotations

import math
import re
from typing import Any

_INTEGER = re.compile(r"^-?\d+$")


def as_chat_id(value: Any) -> int | str:
    """Numeric chat id or `@channel_username`."""
    if isinstance(value, bool):
        raise ValueError("must be an integer or string chat id")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    raise ValueError("must be an integer or string chat id")


def as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INTEGER.match(value.strip()):
        return int(value.strip())
    raise ValueError("must be an integer")


def as_number(value: Any) -> int | float:
    if isinstance(value, bool):
        raise ValueError("must be a number")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise ValueError("must be a number") from None
    if not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    if not math.isfinite(value):
        raise ValueError("must be a finite number")
    return value


def as_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise ValueError("must be a string")


def as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValueError("must be an array")


def as_object(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return value
    raise ValueError("must be an object")
