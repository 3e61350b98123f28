"""Tool listing and direct execution endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from mcp_chat_server.approvals import ApprovalStore
from mcp_chat_server.dependencies import get_approval_store, get_tool_directory
from mcp_chat_server.exceptions import ToolExecutionError, UnknownServerError
from mcp_chat_server.models.tools import (
    ExecuteToolRequest,
    ExecuteToolResponse,
    ToolInfo,
    ToolListResponse,
)
from mcp_chat_server.tools import ToolDirectory, reduce_tool_result

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tools", tags=["tools"])


@router.get("", response_model=ToolListResponse)
async def list_tools(
    tool_directory: ToolDirectory = Depends(get_tool_directory),
    approval_store: ApprovalStore = Depends(get_approval_store),
) -> ToolListResponse:
    """List the tools of all connected MCP servers.

    Servers that fail to answer are left out of the list.
    """
    tools = await tool_directory.list_all_tools()
    logger.debug(f"Listing {len(tools)} tools")

    return ToolListResponse(
        tools=[
            ToolInfo(
                server_name=tool.server_name,
                name=tool.tool_name,
                qualified_name=tool.qualified_name,
                title=tool.title,
                description=tool.description,
                input_schema=tool.input_schema,
                requires_approval=approval_store.get(tool.server_name, tool.tool_name),
            )
            for tool in tools
        ]
    )


@router.post("/execute", response_model=ExecuteToolResponse)
async def execute_tool(
    request_body: ExecuteToolRequest,
    tool_directory: ToolDirectory = Depends(get_tool_directory),
) -> ExecuteToolResponse:
    """Execute a tool call the user has confirmed.

    Raises:
        HTTPException: 404 if the server is not connected, 502 if the tool fails
    """
    try:
        result = await tool_directory.invoke(
            request_body.server_name,
            request_body.tool_name,
            request_body.arguments,
        )
    except UnknownServerError as e:
        raise HTTPException(
            status_code=404,
            detail={
                "error": {
                    "code": "server_not_found",
                    "message": str(e),
                    "details": {"server_name": e.server_name},
                }
            },
        )
    except ToolExecutionError as e:
        logger.error(f"Error executing tool: {e}")
        raise HTTPException(
            status_code=502,
            detail={
                "error": {
                    "code": "tool_execution_failed",
                    "message": "Failed to execute tool",
                    "details": {
                        "server_name": e.server_name,
                        "tool_name": e.tool_name,
                    },
                }
            },
        )

    return ExecuteToolResponse(result=reduce_tool_result(result))
