"""Pydantic models for chat API requests and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatRequest(BaseModel):
    """Request body for POST /api/v1/chat."""

    message: str = Field(default="", description="The user message to answer")

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"message": "What's the weather in Paris?"}]}
    )


class ChatResponse(BaseModel):
    """Final answer of a completed conversation."""

    response: str = Field(description="The assistant's final answer")


class ApprovalRequiredResponse(BaseModel):
    """Returned instead of an answer when a tool call needs user approval.

    The client confirms or declines the call with
    POST /api/v1/chat/approvals/{approval_id}.
    """

    requires_approval: bool = Field(default=True)
    approval_id: str = Field(description="Identifier used to resume the chat")
    server_name: str = Field(description="Server hosting the tool")
    tool_name: str = Field(description="Tool awaiting approval")
    arguments: dict[str, Any] = Field(
        default_factory=dict, description="Arguments the tool will receive"
    )
    message: str = Field(description="Human readable explanation")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "requires_approval": True,
                "approval_id": "a1b2c3d4e5",
                "server_name": "files",
                "tool_name": "delete",
                "arguments": {"path": "/tmp/report.txt"},
                "message": "Tool files.delete requires your approval to execute.",
            }
        }
    )


class ApprovalDecisionRequest(BaseModel):
    """Request body for resuming a chat suspended on a tool approval."""

    approved: bool = Field(description="Whether the tool call may run")
