"""MCP tool directory, argument handling and result reduction.

This package discovers tools on remote MCP servers, cleans and checks the
arguments the model sends, and reduces tool results to message text.
"""

from mcp_chat_server.tools.directory import ToolDirectory
from mcp_chat_server.tools.results import reduce_tool_result
from mcp_chat_server.tools.sanitizer import sanitize_arguments
from mcp_chat_server.tools.schema import ValueKind, validate_arguments
from mcp_chat_server.tools.types import (
    ToolDescriptor,
    ToolInvocationRequest,
    qualify,
)

__all__ = [
    "ToolDescriptor",
    "ToolDirectory",
    "ToolInvocationRequest",
    "ValueKind",
    "qualify",
    "reduce_tool_result",
    "sanitize_arguments",
    "validate_arguments",
]
