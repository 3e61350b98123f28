"""Ollama client wrapper and integration layer.

This package provides the async client used to send conversations to the
Ollama chat API.
"""

from mcp_chat_server.ollama.client import OllamaClient
from mcp_chat_server.ollama.types import ModelReply

__all__ = ["ModelReply", "OllamaClient"]
