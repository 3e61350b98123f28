"""Chat API endpoints.

This module provides the endpoint that answers a user message through the
conversation loop, and the endpoint that resumes a conversation suspended
on a tool call awaiting approval.
"""

import logging
from typing import Awaitable

from fastapi import APIRouter, Depends, HTTPException

from mcp_chat_server.conversation import (
    ConversationLoop,
    PendingApprovalRegistry,
    PendingToolCall,
)
from mcp_chat_server.dependencies import get_conversation_loop, get_pending_approvals
from mcp_chat_server.exceptions import (
    InvalidInputError,
    RoundLimitExceededError,
    ToolApprovalRequiredError,
    ToolExecutionError,
)
from mcp_chat_server.models.chat import (
    ApprovalDecisionRequest,
    ApprovalRequiredResponse,
    ChatRequest,
    ChatResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


def _error(
    status_code: int, code: str, message: str, details: dict | None = None
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "error": {
                "code": code,
                "message": message,
                "details": details or {},
            }
        },
    )


def _approval_response(
    pending: PendingToolCall, pending_approvals: PendingApprovalRegistry
) -> ApprovalRequiredResponse:
    approval_id = pending_approvals.add(pending)
    return ApprovalRequiredResponse(
        approval_id=approval_id,
        server_name=pending.server_name,
        tool_name=pending.tool_name,
        arguments=pending.arguments,
        message=f"Tool {pending.qualified_name} requires your approval to execute.",
    )


async def _run_conversation(
    run: Awaitable[str], pending_approvals: PendingApprovalRegistry
) -> ChatResponse | ApprovalRequiredResponse:
    """Await a conversation coroutine and map its outcome to a response.

    Raises:
        HTTPException: 400 on empty input, 500 on any other failure
    """
    try:
        answer = await run
    except InvalidInputError as e:
        raise _error(400, "invalid_input", str(e))
    except ToolApprovalRequiredError as e:
        logger.info(f"Chat suspended: {e}")
        return _approval_response(e.pending, pending_approvals)
    except RoundLimitExceededError as e:
        logger.error(f"Chat error: {e}")
        raise _error(
            500, "round_limit_exceeded", str(e), {"max_rounds": e.max_rounds}
        )
    except ToolExecutionError as e:
        logger.error(f"Chat error: {e}")
        raise _error(
            500,
            "chat_failed",
            "Failed to process chat",
            {"server_name": e.server_name, "tool_name": e.tool_name},
        )
    except Exception as e:
        logger.error(f"Chat error: {e}")
        raise _error(500, "chat_failed", "Failed to process chat")

    return ChatResponse(response=answer)


@router.post("", response_model=ChatResponse | ApprovalRequiredResponse)
async def chat(
    request_body: ChatRequest,
    loop: ConversationLoop = Depends(get_conversation_loop),
    pending_approvals: PendingApprovalRegistry = Depends(get_pending_approvals),
) -> ChatResponse | ApprovalRequiredResponse:
    """Answer a user message, calling MCP tools as the model requests.

    Returns:
        ChatResponse with the final answer, or ApprovalRequiredResponse if a
        tool call is waiting for the user's approval

    Raises:
        HTTPException: 400 if the message is empty, 500 if the conversation fails
    """
    return await _run_conversation(
        loop.start_conversation(request_body.message), pending_approvals
    )


@router.post(
    "/approvals/{approval_id}",
    response_model=ChatResponse | ApprovalRequiredResponse,
)
async def decide_approval(
    approval_id: str,
    request_body: ApprovalDecisionRequest,
    loop: ConversationLoop = Depends(get_conversation_loop),
    pending_approvals: PendingApprovalRegistry = Depends(get_pending_approvals),
) -> ChatResponse | ApprovalRequiredResponse:
    """Approve or decline a pending tool call and continue the conversation.

    Raises:
        HTTPException: 404 if the approval is unknown or expired, 500 if the
        resumed conversation fails
    """
    pending = pending_approvals.take(approval_id)
    if pending is None:
        raise _error(
            404,
            "approval_not_found",
            f"Pending approval {approval_id} not found",
            {"approval_id": approval_id},
        )

    return await _run_conversation(
        loop.resume(pending, request_body.approved), pending_approvals
    )
