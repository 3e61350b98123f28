"""Conversation loop and message types.

This package contains the loop that drives the model through tool-call
rounds, plus the registry of conversations waiting for tool approval.
"""

from mcp_chat_server.conversation.loop import ConversationLoop, LoopState
from mcp_chat_server.conversation.pending import (
    PendingApprovalRegistry,
    PendingToolCall,
)
from mcp_chat_server.conversation.types import Conversation

__all__ = [
    "Conversation",
    "ConversationLoop",
    "LoopState",
    "PendingApprovalRegistry",
    "PendingToolCall",
]
