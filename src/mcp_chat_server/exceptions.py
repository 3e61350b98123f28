"""Exception hierarchy for mcp-chat-server.

Routers translate these into HTTP error responses; the conversation loop
decides which ones are skipped and which ones abort a conversation.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from mcp_chat_server.conversation.pending import PendingToolCall


class McpChatError(Exception):
    """Base class for all mcp-chat-server errors."""


class InvalidInputError(McpChatError):
    """The user message is empty."""


class MalformedToolCallError(McpChatError):
    """A qualified tool name is missing its server or tool segment."""

    def __init__(self, qualified_name: str) -> None:
        self.qualified_name = qualified_name
        super().__init__(
            f"Malformed tool name '{qualified_name}', expected 'server.tool'"
        )


class UnknownServerError(McpChatError):
    """A tool call references a server that is not connected."""

    def __init__(self, server_name: str) -> None:
        self.server_name = server_name
        super().__init__(f"No MCP server connected with name: {server_name}")


class ToolExecutionError(McpChatError):
    """A remote tool call failed after reaching a connected server."""

    def __init__(self, server_name: str, tool_name: str, reason: str) -> None:
        self.server_name = server_name
        self.tool_name = tool_name
        self.reason = reason
        super().__init__(
            f"Tool {server_name}.{tool_name} failed: {reason}"
        )


class RoundLimitExceededError(McpChatError):
    """The model kept requesting tools past the configured round limit."""

    def __init__(self, max_rounds: int) -> None:
        self.max_rounds = max_rounds
        super().__init__(
            f"Model requested tools for more than {max_rounds} rounds"
        )


class ToolApprovalRequiredError(McpChatError):
    """A tool call needs explicit user approval before it may run.

    Carries the suspended conversation so it can be resumed once the
    caller confirms or declines the call.
    """

    def __init__(self, pending: "PendingToolCall") -> None:
        self.pending = pending
        super().__init__(
            f"Tool {pending.server_name}.{pending.tool_name} requires approval"
        )

    @property
    def server_name(self) -> str:
        return self.pending.server_name

    @property
    def tool_name(self) -> str:
        return self.pending.tool_name

    @property
    def arguments(self) -> dict[str, Any]:
        return self.pending.arguments
