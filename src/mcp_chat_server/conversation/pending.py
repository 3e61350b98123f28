"""Conversations suspended while waiting for tool call approval."""

import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Any

from mcp_chat_server.conversation.types import Conversation
from mcp_chat_server.tools.types import ToolInvocationRequest, qualify

logger = logging.getLogger(__name__)


@dataclass
class PendingToolCall:
    """A tool call held back until the user approves or declines it.

    Attributes:
        server_name: Server hosting the blocked tool
        tool_name: Unqualified name of the blocked tool
        arguments: Sanitized arguments the tool would receive
        conversation: History up to and including the blocked round
        tools: Function signatures sent with every model call
        rounds: Tool-call rounds completed so far
        remaining: Requests of the current round still to dispatch
        approval_id: Key used to resume the conversation
        created_at: Monotonic creation time, used for expiry
    """

    server_name: str
    tool_name: str
    arguments: dict[str, Any]
    conversation: Conversation
    tools: list[dict[str, Any]] = field(default_factory=list)
    rounds: int = 0
    remaining: list[ToolInvocationRequest] = field(default_factory=list)
    approval_id: str = field(default_factory=lambda: uuid.uuid4().hex[:10])
    created_at: float = field(default_factory=time.monotonic)

    @property
    def qualified_name(self) -> str:
        return qualify(self.server_name, self.tool_name)


class PendingApprovalRegistry:
    """In-memory registry of suspended conversations keyed by approval id.

    Entries expire after ttl seconds and are removed once taken.
    """

    def __init__(self, ttl: float = 900.0) -> None:
        self.ttl = ttl
        self._pending: dict[str, PendingToolCall] = {}
        self._lock = threading.Lock()

    def add(self, pending: PendingToolCall) -> str:
        with self._lock:
            self._purge_expired()
            self._pending[pending.approval_id] = pending
        logger.info(
            f"Waiting for approval {pending.approval_id} of {pending.qualified_name}"
        )
        return pending.approval_id

    def take(self, approval_id: str) -> PendingToolCall | None:
        """Remove and return a pending call, or None if unknown or expired."""
        with self._lock:
            self._purge_expired()
            return self._pending.pop(approval_id, None)

    def _purge_expired(self) -> None:
        now = time.monotonic()
        expired = [
            approval_id
            for approval_id, pending in self._pending.items()
            if now - pending.created_at > self.ttl
        ]
        for approval_id in expired:
            logger.debug(f"Pending approval {approval_id} expired")
            del self._pending[approval_id]

    def __len__(self) -> int:
        return len(self._pending)
