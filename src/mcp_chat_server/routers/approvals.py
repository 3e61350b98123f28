"""Tool approval preference endpoints.

This module provides CRUD endpoints for the per-tool setting that decides
whether a tool call must be confirmed by the user before it runs.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from mcp_chat_server.approvals import ApprovalStore
from mcp_chat_server.dependencies import get_approval_store
from mcp_chat_server.models.tools import (
    SetToolApprovalRequest,
    ToolApprovalListResponse,
    ToolApprovalResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/tool-approvals", tags=["tool-approvals"])


def _not_found(server_name: str, tool_name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error": {
                "code": "approval_not_found",
                "message": "Tool approval setting not found",
                "details": {"server_name": server_name, "tool_name": tool_name},
            }
        },
    )


def _save_error(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={
            "error": {
                "code": "approval_save_error",
                "message": message,
                "details": {},
            }
        },
    )


@router.get("", response_model=ToolApprovalListResponse)
async def list_tool_approvals(
    approval_store: ApprovalStore = Depends(get_approval_store),
) -> ToolApprovalListResponse:
    """List all stored tool approval settings."""
    return ToolApprovalListResponse(
        approvals=[
            ToolApprovalResponse.model_validate(approval)
            for approval in approval_store.list_all()
        ]
    )


@router.get("/{server_name}/{tool_name}", response_model=ToolApprovalResponse)
async def get_tool_approval(
    server_name: str,
    tool_name: str,
    approval_store: ApprovalStore = Depends(get_approval_store),
) -> ToolApprovalResponse:
    """Get the approval setting for one tool.

    Raises:
        HTTPException: 404 if no setting is stored for the tool
    """
    approval = approval_store.get_record(server_name, tool_name)
    if approval is None:
        raise _not_found(server_name, tool_name)
    return ToolApprovalResponse.model_validate(approval)


@router.post("", response_model=ToolApprovalResponse)
async def set_tool_approval(
    request_body: SetToolApprovalRequest,
    approval_store: ApprovalStore = Depends(get_approval_store),
) -> ToolApprovalResponse:
    """Create or update the approval setting for a tool."""
    try:
        approval = approval_store.set(
            request_body.server_name,
            request_body.tool_name,
            request_body.requires_approval,
        )
    except OSError as e:
        logger.error(f"Error setting tool approval: {e}")
        raise _save_error("Failed to set tool approval")

    logger.info(
        f"Tool {approval.server_name}.{approval.tool_name} "
        f"requires_approval={approval.requires_approval}"
    )
    return ToolApprovalResponse.model_validate(approval)


@router.delete("/{server_name}/{tool_name}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tool_approval(
    server_name: str,
    tool_name: str,
    approval_store: ApprovalStore = Depends(get_approval_store),
) -> None:
    """Delete the approval setting for a tool.

    Raises:
        HTTPException: 404 if no setting is stored for the tool
        HTTPException: 500 if the change cannot be saved
    """
    try:
        deleted = approval_store.delete(server_name, tool_name)
    except OSError as e:
        logger.error(f"Error deleting tool approval: {e}")
        raise _save_error("Failed to delete tool approval")

    if not deleted:
        raise _not_found(server_name, tool_name)
    logger.info(f"Deleted approval setting for {server_name}.{tool_name}")
