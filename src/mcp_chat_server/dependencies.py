"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
multiple routers to inject common dependencies like settings and services.
"""

from functools import lru_cache
from typing import Any

from fastapi import HTTPException, Request

from mcp_chat_server.approvals import ApprovalStore
from mcp_chat_server.config import McpChatSettings
from mcp_chat_server.conversation import ConversationLoop, PendingApprovalRegistry
from mcp_chat_server.ollama import OllamaClient
from mcp_chat_server.tools import ToolDirectory


@lru_cache
def get_settings() -> McpChatSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the MCP_CHAT_ prefix.

    Returns:
        McpChatSettings: The application configuration settings.
    """
    return McpChatSettings()


def _get_state(request: Request, name: str, label: str) -> Any:
    if not hasattr(request.app.state, name):
        raise HTTPException(
            status_code=503,
            detail=f"{label} not initialized",
        )
    return getattr(request.app.state, name)


def get_ollama_client(request: Request) -> OllamaClient:
    """Get the Ollama client from app state.

    Raises:
        HTTPException: If the Ollama client is not initialized (503 Service Unavailable).
    """
    return _get_state(request, "ollama_client", "Ollama client")


def get_tool_directory(request: Request) -> ToolDirectory:
    """Get the MCP tool directory from app state.

    Raises:
        HTTPException: If the tool directory is not initialized (503 Service Unavailable).
    """
    return _get_state(request, "tool_directory", "Tool directory")


def get_approval_store(request: Request) -> ApprovalStore:
    """Get the tool approval store from app state.

    Raises:
        HTTPException: If the approval store is not initialized (503 Service Unavailable).
    """
    return _get_state(request, "approval_store", "Approval store")


def get_pending_approvals(request: Request) -> PendingApprovalRegistry:
    """Get the registry of conversations waiting for tool approval."""
    return _get_state(request, "pending_approvals", "Pending approval registry")


def get_conversation_loop(request: Request) -> ConversationLoop:
    """Get a ConversationLoop configured from app settings and state.

    Creates a new loop for each request; the Ollama client, tool directory
    and approval store it uses are shared.

    Args:
        request: The FastAPI request object.

    Returns:
        ConversationLoop: A new ConversationLoop instance.
    """
    # Use settings from app.state instead of cached get_settings()
    # This ensures tests can use their own isolated settings
    settings: McpChatSettings = request.app.state.settings
    approval_store = (
        get_approval_store(request) if settings.approvals_enabled else None
    )

    return ConversationLoop(
        ollama_client=get_ollama_client(request),
        tool_directory=get_tool_directory(request),
        model=settings.ollama_model,
        approval_store=approval_store,
        max_tool_rounds=settings.max_tool_rounds,
        strict_argument_validation=settings.strict_argument_validation,
    )
