"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mcp_chat_server import __version__
from mcp_chat_server.approvals import JsonApprovalStore
from mcp_chat_server.config import McpChatSettings
from mcp_chat_server.conversation import PendingApprovalRegistry
from mcp_chat_server.ollama import OllamaClient
from mcp_chat_server.routers import approvals, chat, health, tools
from mcp_chat_server.tools import ToolDirectory

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    Expensive objects (the Ollama client, the MCP sessions and the approval
    store) are created once at startup and stored in app.state for reuse
    across all requests. MCP sessions are closed at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: McpChatSettings = app.state.settings

    # Startup: Initialize Ollama client
    app.state.ollama_client = OllamaClient(host=settings.ollama_host)
    logger.info(f"Initialized Ollama client with host: {settings.ollama_host}")

    connected = await app.state.ollama_client.check_connection()
    if connected:
        logger.info("Successfully connected to Ollama")
    else:
        logger.warning("Could not connect to Ollama - check if server is running")

    # Startup: Connect to MCP servers; unreachable servers are skipped
    app.state.tool_directory = ToolDirectory(
        tool_call_timeout=settings.tool_call_timeout
    )
    await app.state.tool_directory.connect(settings.mcp_servers)
    logger.info(
        f"Connected to {len(app.state.tool_directory.server_names)} "
        f"of {len(settings.mcp_servers)} MCP servers"
    )

    app.state.approval_store = JsonApprovalStore(settings.resolved_approvals_file)
    app.state.pending_approvals = PendingApprovalRegistry(
        ttl=settings.pending_approval_ttl
    )

    yield

    # Shutdown: Clean up resources
    if hasattr(app.state, "tool_directory"):
        await app.state.tool_directory.disconnect_all()

    if hasattr(app.state, "ollama_client"):
        await app.state.ollama_client.close()
        logger.info("Ollama client closed")


def create_app(settings: McpChatSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a FastAPI instance with all routers,
    middleware, and configuration applied. It can accept an optional
    settings object for testing or explicit configuration.

    Args:
        settings: Optional McpChatSettings instance. If not provided,
                  settings will be loaded from environment variables.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from mcp_chat_server.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="mcp-chat-server",
        description="Headless FastAPI server for Ollama conversations with MCP tools",
        version=__version__,
        lifespan=lifespan,
    )

    # Store settings in app.state for lifespan access
    app.state.settings = settings

    # Configure CORS
    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routers
    app.include_router(health.router)
    app.include_router(chat.router)
    app.include_router(tools.router)
    app.include_router(approvals.router)

    return app
