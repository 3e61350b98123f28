"""Tool approval preferences.

This package provides the ApprovalStore interface consulted before each
tool call, plus in-memory and JSON file implementations.
"""

from mcp_chat_server.approvals.store import (
    ApprovalStore,
    InMemoryApprovalStore,
    JsonApprovalStore,
)
from mcp_chat_server.approvals.types import ToolApproval

__all__ = [
    "ApprovalStore",
    "InMemoryApprovalStore",
    "JsonApprovalStore",
    "ToolApproval",
]
