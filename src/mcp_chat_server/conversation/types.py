"""Data types for conversations.

This module defines the messages exchanged with the model during one chat
request. Conversations live only as long as the request that started them.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class UserMessage:
    """A message from the user."""

    role: str = "user"
    content: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'user'."""
        self.role = "user"

    def to_ollama(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass
class SystemMessage:
    """A system prompt message."""

    role: str = "system"
    content: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'system'."""
        self.role = "system"

    def to_ollama(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass
class AssistantMessage:
    """A response from the LLM assistant, possibly requesting tool calls."""

    role: str = "assistant"
    content: str = ""
    tool_calls: list[dict[str, Any]] | None = None

    def __post_init__(self) -> None:
        """Validate role is always 'assistant'."""
        self.role = "assistant"

    def to_ollama(self) -> dict[str, Any]:
        message: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.tool_calls:
            message["tool_calls"] = self.tool_calls
        return message


@dataclass
class ToolMessage:
    """A tool execution result."""

    role: str = "tool"
    tool_name: str = ""
    content: str = ""

    def __post_init__(self) -> None:
        """Validate role is always 'tool'."""
        self.role = "tool"

    def to_ollama(self) -> dict[str, Any]:
        return {"role": self.role, "content": self.content, "tool_name": self.tool_name}


# Union type for all message types
Message = UserMessage | SystemMessage | AssistantMessage | ToolMessage


@dataclass
class Conversation:
    """Ordered message history for a single chat request."""

    messages: list[Message] = field(default_factory=list)

    @classmethod
    def start(cls, system_prompt: str, user_text: str) -> "Conversation":
        """Create a conversation holding the system prompt and the user message."""
        return cls(
            messages=[
                SystemMessage(content=system_prompt),
                UserMessage(content=user_text),
            ]
        )

    def append(self, message: Message) -> None:
        self.messages.append(message)

    def to_ollama(self) -> list[dict[str, Any]]:
        """Convert the history to Ollama API format."""
        return [message.to_ollama() for message in self.messages]

    def __len__(self) -> int:
        return len(self.messages)
