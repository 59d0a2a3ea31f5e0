"""The tool catalogue.

Tool modules expose `get_tools()` returning an ordered mapping
`tool_name -> {handler, title, description, input_schema, annotations}`.
They are imported in a fixed order so the catalogue enumerates the same way
on every start; names must be unique across modules.
"""
from __future__ import annotations

import logging
from importlib import import_module
from types import MappingProxyType
from typing import Mapping, Optional

from tools.base import ToolAnnotations, ToolDescriptor, ToolHandler

logger = logging.getLogger(__name__)

TOOLS_PACKAGE = "tools"
TOOL_MODULES = ("bot_info", "messages", "edits", "chats", "webhooks", "files", "pins")


def _load_catalogue() -> tuple[tuple[ToolDescriptor, ...], Mapping[str, ToolHandler]]:
    descriptors: list[ToolDescriptor] = []
    handlers: dict[str, ToolHandler] = {}
    for name in TOOL_MODULES:
        module_name = f"{TOOLS_PACKAGE}.{name}"
        mod = import_module(module_name)
        for tool_name, meta in mod.get_tools().items():
            if tool_name in handlers:
                raise ValueError(f"Duplicate tool name {tool_name!r} in {module_name}")
            handler = meta.get("handler")
            if not isinstance(handler, ToolHandler):
                raise TypeError(f"Tool {tool_name} in {module_name} did not provide a ToolHandler")
            descriptors.append(
                ToolDescriptor(
                    name=tool_name,
                    title=meta.get("title") or tool_name,
                    description=meta["description"],
                    input_schema=MappingProxyType(meta["input_schema"]),
                    annotations=meta.get("annotations") or ToolAnnotations(),
                )
            )
            handlers[tool_name] = handler
        logger.debug("Loaded tools from %s", module_name)
    return tuple(descriptors), MappingProxyType(handlers)


TOOLS, HANDLERS = _load_catalogue()


def tool_names() -> list[str]:
    return [tool.name for tool in TOOLS]


def get_tool(name: str) -> Optional[ToolDescriptor]:
    for tool in TOOLS:
        if tool.name == name:
            return tool
    return None
