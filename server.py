import asyncio
import json
import sys
from functools import partial
from typing import Any, Optional

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from core.client_cache import ClientCache
from core.config import get_config
from core.dispatcher import ToolCallResult, call_tool
from core.logging_config import setup_logging
from core.telegram_client import TelegramClient
from tools.registry import TOOLS

_cfg = get_config()
logger = setup_logging(_cfg.get("log_dir"), level=_cfg.get("log_level", "INFO"))


class ToolCallFailed(Exception):
    """Raised inside the MCP handler so the SDK reports the call with isError=true."""


def to_mcp_tool(tool) -> types.Tool:
    hints = tool.annotations
    return types.Tool(
        name=tool.name,
        description=tool.description,
        inputSchema=json.loads(json.dumps(dict(tool.input_schema))),
        annotations=types.ToolAnnotations(
            title=tool.title,
            readOnlyHint=hints.read_only,
            destructiveHint=hints.destructive,
            idempotentHint=hints.idempotent,
            openWorldHint=hints.open_world,
        ),
    )


def render_result(result: ToolCallResult) -> list[types.TextContent]:
    outcome = result.to_dict()
    if not outcome["success"]:
        raise ToolCallFailed(f"Error: {outcome['error']}")
    return [types.TextContent(type="text", text=json.dumps(outcome["value"], indent=2, ensure_ascii=False))]


def build_server(config: Optional[dict[str, Any]] = None) -> Server:
    """Create the MCP server publishing the Telegram tool catalogue."""
    config = config or _cfg
    server = Server(config.get("server_name", "telegram-bot-mcp"))
    default_token = config.get("bot_token") or None
    cache = ClientCache(
        partial(
            TelegramClient,
            base_url=config["telegram_api_url"],
            timeout=config["request_timeout"],
        )
    )
    mcp_tools = [to_mcp_tool(tool) for tool in TOOLS]

    @server.list_tools()
    async def _list_tools() -> list[types.Tool]:
        return mcp_tools

    # Arguments are shape-checked by the dispatcher, which also accepts numeric chat ids
    @server.call_tool(validate_input=False)
    async def _call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        logger.info("Tool call: %s", name)
        result = await call_tool(name, arguments or {}, default_token=default_token, cache=cache)
        return render_result(result)

    logger.info(
        "MCP server %s ready with %d tools (default token configured: %s)",
        server.name,
        len(mcp_tools),
        bool(default_token),
    )
    return server


async def run_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    logger.info("Starting MCP server...")
    try:
        asyncio.run(run_stdio(build_server()))
        logger.info("MCP server shut down.")
    except KeyboardInterrupt:
        logger.info("MCP server interrupted.")
    except Exception:
        logger.exception("Unhandled exception running MCP server")
        print("Unhandled exception occurred. See logs/ for details.", file=sys.stderr)
        sys.exit(-1)


if __name__ == "__main__":
    main()
