# tools package for the Telegram MCP server
# Each tool module exposes `get_tools() -> dict[str, dict]` mapping a tool name to its
# handler, title, description, input_schema and annotations. `tools.registry` imports
# them in a fixed order and builds the catalogue the server publishes.
__all__ = []
