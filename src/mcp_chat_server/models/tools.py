"""Pydantic models for the tools and tool approval endpoints."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ToolInfo(BaseModel):
    """A tool exposed by a connected MCP server."""

    server_name: str = Field(description="Server hosting the tool")
    name: str = Field(description="Tool name on its server")
    qualified_name: str = Field(description="Name the model sees: server.tool")
    title: str | None = Field(default=None, description="Optional display title")
    description: str = Field(default="", description="Tool description")
    input_schema: dict[str, Any] = Field(
        default_factory=dict, description="JSON Schema of the tool arguments"
    )
    requires_approval: bool = Field(
        default=False, description="Whether calls need user approval"
    )


class ToolListResponse(BaseModel):
    """Response for GET /api/v1/tools."""

    tools: list[ToolInfo] = Field(default_factory=list)


class ExecuteToolRequest(BaseModel):
    """Request body for POST /api/v1/tools/execute."""

    server_name: str = Field(min_length=1)
    tool_name: str = Field(min_length=1)
    arguments: dict[str, Any] = Field(default_factory=dict)


class ExecuteToolResponse(BaseModel):
    """Result of a directly executed tool call."""

    message: str = Field(default="Tool executed successfully")
    result: str = Field(description="Tool result reduced to text")


class ToolApprovalResponse(BaseModel):
    """Approval preference for one tool."""

    server_name: str
    tool_name: str
    requires_approval: bool
    updated_at: str = ""

    model_config = ConfigDict(from_attributes=True)


class ToolApprovalListResponse(BaseModel):
    """Response for GET /api/v1/tool-approvals."""

    approvals: list[ToolApprovalResponse] = Field(default_factory=list)


class SetToolApprovalRequest(BaseModel):
    """Request body for POST /api/v1/tool-approvals."""

    server_name: str = Field(min_length=1)
    tool_name: str = Field(min_length=1)
    requires_approval: bool

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "server_name": "files",
                "tool_name": "delete",
                "requires_approval": True,
            }
        }
    )
