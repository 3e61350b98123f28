"""Type definitions for Ollama integration.

This module contains the dataclass representing one assistant reply
returned by the Ollama chat API.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from mcp_chat_server.tools.types import ToolInvocationRequest

logger = logging.getLogger(__name__)


@dataclass
class ModelReply:
    """One non-streaming reply from the Ollama chat API.

    Attributes:
        content: Text content of the assistant message (may be empty)
        tool_calls: Tool calls requested by the model, in emitted order
        model: Model that produced the reply
        eval_count: Number of tokens generated
        prompt_eval_count: Number of tokens in the prompt
    """

    content: str = ""
    tool_calls: list[ToolInvocationRequest] = field(default_factory=list)
    model: str = ""
    eval_count: int | None = None
    prompt_eval_count: int | None = None

    @property
    def has_tool_calls(self) -> bool:
        return bool(self.tool_calls)

    @staticmethod
    def from_ollama_response(response: Any) -> "ModelReply":
        """Create a ModelReply from an Ollama chat response.

        Args:
            response: ollama.ChatResponse or the equivalent dict

        Returns:
            ModelReply: Parsed reply
        """
        if hasattr(response, "model_dump"):
            data = response.model_dump()
        elif isinstance(response, dict):
            data = response
        else:
            data = vars(response)

        message = data.get("message") or {}

        tool_calls = []
        for call in message.get("tool_calls") or []:
            function = call.get("function") or {}
            arguments = function.get("arguments") or {}
            # Some models send arguments as a JSON string
            if isinstance(arguments, str):
                try:
                    arguments = json.loads(arguments) if arguments.strip() else {}
                except json.JSONDecodeError:
                    logger.warning(
                        f"Could not decode arguments for tool call {function.get('name')}"
                    )
                    arguments = {}
            if not isinstance(arguments, dict):
                logger.warning(
                    f"Ignoring non-object arguments for tool call {function.get('name')}: "
                    f"{arguments!r}"
                )
                arguments = {}
            tool_calls.append(
                ToolInvocationRequest(
                    qualified_name=function.get("name") or "",
                    arguments=dict(arguments),
                )
            )

        return ModelReply(
            content=message.get("content") or "",
            tool_calls=tool_calls,
            model=data.get("model") or "",
            eval_count=data.get("eval_count"),
            prompt_eval_count=data.get("prompt_eval_count"),
        )
