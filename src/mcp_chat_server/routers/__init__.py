"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
Each router module defines endpoints for a specific domain (health, chat, tools, approvals).
"""

from mcp_chat_server.routers import approvals, chat, health, tools

__all__ = [
    "approvals",
    "chat",
    "health",
    "tools",
]
