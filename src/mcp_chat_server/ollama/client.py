"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient for
communicating with the Ollama API. The client is designed to be created
once at startup and reused by all chat requests.
"""

import logging
from typing import Any

import ollama

from mcp_chat_server.ollama.types import ModelReply

logger = logging.getLogger(__name__)


class OllamaClient:
    """Async client for interacting with Ollama API.

    This client wraps ollama.AsyncClient and provides the non-streaming
    chat call used by the conversation loop, plus a connectivity check.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(self, host: str) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
        """
        self.host = host
        self._client = ollama.AsyncClient(host=host)
        logger.info(f"OllamaClient initialized with host: {host}")

    async def check_connection(self) -> bool:
        """Check if the Ollama server is reachable.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            # Try to list models as a connectivity check
            await self._client.list()
            logger.debug("Ollama connection check: successful")
            return True
        except Exception as e:
            logger.warning(f"Ollama connection check failed: {e}")
            return False

    async def chat(
        self,
        model: str,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
    ) -> ModelReply:
        """Send the conversation to Ollama and return the assistant reply.

        Args:
            model: The model name to use for the chat
            messages: List of message dicts in Ollama format
            tools: Optional function signatures; omitted from the request
                   entirely when None or empty

        Returns:
            ModelReply: The assistant's content and requested tool calls

        Raises:
            Exception: If the Ollama API request fails
        """
        request: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "stream": False,
        }
        if tools:
            request["tools"] = tools

        try:
            logger.debug(
                f"Sending chat to {model}: {len(messages)} messages, "
                f"{len(tools or [])} tools"
            )
            response = await self._client.chat(**request)
        except Exception as e:
            logger.error(f"Chat request failed: {e}")
            raise

        reply = ModelReply.from_ollama_response(response)
        logger.debug(
            f"Received reply: content_length={len(reply.content)}, "
            f"tool_calls={len(reply.tool_calls)}"
        )
        return reply

    async def close(self) -> None:
        """Close the client and clean up resources.

        ollama.AsyncClient uses httpx internally which handles cleanup.
        """
        logger.debug("OllamaClient closed")
