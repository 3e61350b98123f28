"""mcp-chat-server: Headless FastAPI server for Ollama conversations with MCP tools.

This package answers chat messages with an Ollama model that can call tools
exposed by remote MCP servers, running as many tool-call rounds as the
model requests.
"""

__version__ = "0.1.0"

from mcp_chat_server.app import create_app  # noqa: E402

__all__ = ["create_app", "__version__"]
