"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures that ensure
proper test isolation and mocking for API endpoint tests.
"""

from unittest.mock import AsyncMock, patch

import pytest

from mcp_chat_server.ollama import ModelReply
from mcp_chat_server.tools import ToolDirectory


@pytest.fixture(autouse=True)
def mock_ollama_client():
    """Mock OllamaClient for all integration tests.

    This fixture patches the OllamaClient class before the app is created,
    ensuring the lifespan uses our mock instead of creating a real client.
    Tests set chat replies through mock_ollama_client.chat.
    """
    with patch("mcp_chat_server.app.OllamaClient") as mock_client_class:
        mock_instance = AsyncMock()
        mock_instance.host = "http://localhost:11434"
        mock_instance.check_connection.return_value = True
        mock_instance.chat.return_value = ModelReply(content="Hello!")

        # Return the mock instance when OllamaClient is instantiated
        mock_client_class.return_value = mock_instance

        yield mock_instance


@pytest.fixture
def calc_session(fake_session, make_tool, make_text_result):
    """Fake 'calc' MCP server with add and delete_all tools."""
    return fake_session(
        tools=[
            make_tool(
                "add",
                {"a": {"type": "number"}, "b": {"type": "number"}},
                ["a", "b"],
                "Add two numbers",
            ),
            make_tool("delete_all", description="Delete everything"),
        ],
        results={"add": make_text_result("4")},
    )


@pytest.fixture(autouse=True)
def tool_directory(calc_session):
    """Patch ToolDirectory so the lifespan uses one with a fake calc server."""
    directory = ToolDirectory()
    directory.register_session("calc", calc_session)

    with patch("mcp_chat_server.app.ToolDirectory", return_value=directory):
        yield directory
