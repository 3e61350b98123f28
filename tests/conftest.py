"""Pytest configuration and shared fixtures for mcp-chat-server tests.

This module provides common fixtures used across all test modules,
including test app creation, async client setup and fake MCP sessions.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mcp.types import CallToolResult, ListToolsResult, TextContent, Tool

from mcp_chat_server import create_app
from mcp_chat_server.config import McpChatSettings


class FakeMcpSession:
    """Stand-in for mcp.ClientSession with canned tools and results."""

    def __init__(
        self,
        tools: list[Tool] | None = None,
        results: dict[str, CallToolResult] | None = None,
        list_error: Exception | None = None,
        call_error: Exception | None = None,
    ):
        self.tools = tools or []
        self.results = results or {}
        self.list_error = list_error
        self.call_error = call_error
        self.calls: list[tuple[str, dict]] = []

    async def list_tools(self) -> ListToolsResult:
        if self.list_error is not None:
            raise self.list_error
        return ListToolsResult(tools=self.tools)

    async def call_tool(self, name: str, arguments: dict | None = None) -> CallToolResult:
        self.calls.append((name, arguments))
        if self.call_error is not None:
            raise self.call_error
        if name in self.results:
            return self.results[name]
        return CallToolResult(content=[TextContent(type="text", text=f"{name} done")])


def build_tool(
    name: str,
    properties: dict | None = None,
    required: list[str] | None = None,
    description: str = "",
) -> Tool:
    """Build an MCP Tool with an object input schema."""
    return Tool(
        name=name,
        description=description or f"The {name} tool",
        inputSchema={
            "type": "object",
            "properties": properties or {},
            "required": required or [],
        },
    )


def text_result(text: str) -> CallToolResult:
    """Build a successful single-part text tool result."""
    return CallToolResult(content=[TextContent(type="text", text=text)])


@pytest.fixture
def fake_session():
    """Factory for FakeMcpSession instances."""
    return FakeMcpSession


@pytest.fixture
def make_tool():
    """Factory for MCP Tool definitions."""
    return build_tool


@pytest.fixture
def make_text_result():
    """Factory for single-part text tool results."""
    return text_result


@pytest.fixture
def test_settings(tmp_path):
    """Create test settings with isolated temporary directories.

    Args:
        tmp_path: Pytest fixture providing a temporary directory.

    Returns:
        McpChatSettings: Settings instance configured for testing.
    """
    return McpChatSettings(
        host="127.0.0.1",
        port=8000,
        ollama_host="http://localhost:11434",
        ollama_model="llama3.2",
        mcp_servers=[],
        data_dir=str(tmp_path),
        approvals_file="tool_approvals.json",
        max_tool_rounds=5,
        log_level="DEBUG",
        cors_origins=["*"],
    )


@pytest.fixture
def test_app(test_settings):
    """Create a FastAPI test application instance.

    Args:
        test_settings: Test settings fixture.

    Returns:
        FastAPI: Configured test application.
    """
    return create_app(settings=test_settings)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Args:
        test_app: Test application fixture.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
