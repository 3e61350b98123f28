"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API requests and responses across all endpoints.
"""

from mcp_chat_server.models.chat import (
    ApprovalDecisionRequest,
    ApprovalRequiredResponse,
    ChatRequest,
    ChatResponse,
)
from mcp_chat_server.models.health import HealthResponse
from mcp_chat_server.models.tools import (
    ExecuteToolRequest,
    ExecuteToolResponse,
    SetToolApprovalRequest,
    ToolApprovalListResponse,
    ToolApprovalResponse,
    ToolInfo,
    ToolListResponse,
)

__all__ = [
    "ApprovalDecisionRequest",
    "ApprovalRequiredResponse",
    "ChatRequest",
    "ChatResponse",
    "ExecuteToolRequest",
    "ExecuteToolResponse",
    "HealthResponse",
    "SetToolApprovalRequest",
    "ToolApprovalListResponse",
    "ToolApprovalResponse",
    "ToolInfo",
    "ToolListResponse",
]
