"""Data types for MCP tools and tool invocation requests."""

from dataclasses import dataclass, field
from typing import Any

from mcp_chat_server.exceptions import MalformedToolCallError

QUALIFIED_NAME_SEPARATOR = "."


def qualify(server_name: str, tool_name: str) -> str:
    """Build the flat tool name the model sees, e.g. 'weather.search'."""
    return f"{server_name}{QUALIFIED_NAME_SEPARATOR}{tool_name}"


@dataclass(frozen=True)
class ToolDescriptor:
    """A tool exposed by one connected MCP server.

    Attributes:
        server_name: Name of the server the tool belongs to
        tool_name: Tool name as reported by the server
        description: Human readable description
        input_schema: JSON Schema object with "properties" and "required"
        title: Optional display title
    """

    server_name: str
    tool_name: str
    description: str = ""
    input_schema: dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )
    title: str | None = None

    @property
    def qualified_name(self) -> str:
        return qualify(self.server_name, self.tool_name)

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required") or [])

    def to_ollama_tool(self) -> dict[str, Any]:
        """Render the tool as an Ollama function signature."""
        return {
            "type": "function",
            "function": {
                "name": self.qualified_name,
                "description": self.description,
                "parameters": self.input_schema,
            },
        }

    @staticmethod
    def from_mcp_tool(tool: Any, server_name: str) -> "ToolDescriptor":
        """Create a descriptor from an MCP SDK Tool object (or a dict)."""

        def get_value(obj: Any, key: str, default: Any = None) -> Any:
            if isinstance(obj, dict):
                return obj.get(key, default)
            return getattr(obj, key, default)

        input_schema = get_value(tool, "inputSchema") or {
            "type": "object",
            "properties": {},
        }
        return ToolDescriptor(
            server_name=server_name,
            tool_name=get_value(tool, "name"),
            description=get_value(tool, "description") or "",
            input_schema=dict(input_schema),
            title=get_value(tool, "title"),
        )


@dataclass
class ToolInvocationRequest:
    """A tool call as emitted by the model."""

    qualified_name: str
    arguments: dict[str, Any] = field(default_factory=dict)

    def parse(self) -> tuple[str, str]:
        """Split the qualified name on its first separator.

        Returns:
            Tuple of (server_name, tool_name)

        Raises:
            MalformedToolCallError: If either segment is missing or empty
        """
        server_name, separator, tool_name = self.qualified_name.partition(
            QUALIFIED_NAME_SEPARATOR
        )
        if not separator or not server_name or not tool_name:
            raise MalformedToolCallError(self.qualified_name)
        return server_name, tool_name

    def to_ollama(self) -> dict[str, Any]:
        return {
            "function": {"name": self.qualified_name, "arguments": self.arguments}
        }
