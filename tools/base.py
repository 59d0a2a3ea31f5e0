"""Types shared by the tool modules and the registry."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping

from core.errors import InvalidArgumentsError

if TYPE_CHECKING:
    from core.telegram_client import TelegramClient

# (client, required params, pass-through options) -> Bot API result
ToolCall = Callable[["TelegramClient", dict[str, Any], dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class ToolAnnotations:
    """Advisory hints for MCP clients; never enforced by the dispatcher."""

    read_only: bool = False
    destructive: bool = False
    idempotent: bool = False
    open_world: bool = False


@dataclass(frozen=True)
class ToolHandler:
    """Adapter from an argument bag to one client call.

    `required` pairs each mandatory argument name with the caster that checks
    its shape (see `utils.arguments`).
    """

    required: tuple[tuple[str, Callable[[Any], Any]], ...]
    call: ToolCall

    @property
    def required_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.required)

    def split(self, tool_name: str, arguments: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
        """Separate the required parameters (cast) from the pass-through options."""
        params: dict[str, Any] = {}
        for name, cast in self.required:
            if arguments.get(name) is None:
                raise InvalidArgumentsError(tool_name, name, "is required")
            try:
                params[name] = cast(arguments[name])
            except ValueError as e:
                raise InvalidArgumentsError(tool_name, name, str(e)) from e
        options = {k: v for k, v in arguments.items() if k not in params}
        return params, options


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    title: str
    description: str
    input_schema: Mapping[str, Any]
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)

    @property
    def required(self) -> tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))
