"""The tool-calling conversation loop.

This module turns one user message into a final answer by calling the
model, executing the tool calls it requests on the connected MCP servers
and feeding the results back until the model answers without tools.
"""

import logging
from enum import Enum
from typing import Any

from mcp_chat_server.approvals import ApprovalStore
from mcp_chat_server.conversation.pending import PendingToolCall
from mcp_chat_server.conversation.prompts import DECLINED_TOOL_CALL, SYSTEM_PROMPT
from mcp_chat_server.conversation.types import (
    AssistantMessage,
    Conversation,
    ToolMessage,
)
from mcp_chat_server.exceptions import (
    InvalidInputError,
    MalformedToolCallError,
    RoundLimitExceededError,
    ToolApprovalRequiredError,
    UnknownServerError,
)
from mcp_chat_server.ollama import OllamaClient
from mcp_chat_server.tools import (
    ToolDirectory,
    ToolInvocationRequest,
    qualify,
    reduce_tool_result,
    sanitize_arguments,
    validate_arguments,
)

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    """States of one conversation run."""

    AWAITING_MODEL = "awaiting_model"
    DISPATCHING_TOOLS = "dispatching_tools"
    DONE = "done"


class ConversationLoop:
    """Drives the model through as many tool-call rounds as it requests.

    Each round appends one assistant message carrying the tool calls,
    followed by one tool message per executed call, in request order.
    Calls with malformed names or unknown servers are logged and skipped.
    Tool execution errors are not caught and abort the conversation.

    Attributes:
        ollama_client: Client used for model calls
        tool_directory: Directory used to list and invoke tools
        model: Ollama model name
        approval_store: Optional store consulted before each tool call
        max_tool_rounds: Maximum number of tool-call rounds per request
        strict_argument_validation: Skip calls whose arguments fail
            schema validation instead of only logging the problems
        system_prompt: First message of every conversation
    """

    def __init__(
        self,
        ollama_client: OllamaClient,
        tool_directory: ToolDirectory,
        model: str,
        approval_store: ApprovalStore | None = None,
        max_tool_rounds: int = 10,
        strict_argument_validation: bool = False,
        system_prompt: str = SYSTEM_PROMPT,
    ) -> None:
        if max_tool_rounds < 1:
            raise ValueError("max_tool_rounds must be at least 1")

        self.ollama_client = ollama_client
        self.tool_directory = tool_directory
        self.model = model
        self.approval_store = approval_store
        self.max_tool_rounds = max_tool_rounds
        self.strict_argument_validation = strict_argument_validation
        self.system_prompt = system_prompt

    async def start_conversation(self, user_text: str) -> str:
        """Answer a user message, running tool calls as needed.

        Args:
            user_text: The user's message

        Returns:
            The content of the model's final tool-free reply

        Raises:
            InvalidInputError: If user_text is empty
            ToolApprovalRequiredError: If a tool call needs user approval
            RoundLimitExceededError: If the model keeps requesting tools
            ToolExecutionError: If a remote tool call fails
        """
        if not user_text or not user_text.strip():
            raise InvalidInputError("Message is required")

        conversation = Conversation.start(self.system_prompt, user_text)

        available_tools = await self.tool_directory.list_all_tools()
        tools = [tool.to_ollama_tool() for tool in available_tools]
        logger.info(f"Starting conversation with {len(tools)} available tools")

        return await self._run(conversation, tools, rounds=0, queued=[])

    async def resume(self, pending: PendingToolCall, approved: bool) -> str:
        """Continue a conversation suspended on an approval-gated tool call.

        Args:
            pending: The suspended call from ToolApprovalRequiredError
            approved: Whether the user allowed the call

        Returns:
            The content of the model's final tool-free reply
        """
        message: ToolMessage | None
        if approved:
            logger.info(f"Tool call {pending.qualified_name} approved")
            try:
                message = await self._execute(
                    pending.server_name, pending.tool_name, pending.arguments
                )
            except UnknownServerError as e:
                logger.error(
                    f"Invalid tool call {pending.qualified_name}, skipping: {e}"
                )
                message = None
        else:
            logger.info(f"Tool call {pending.qualified_name} declined")
            message = ToolMessage(
                tool_name=pending.qualified_name,
                content=DECLINED_TOOL_CALL.format(
                    qualified_name=pending.qualified_name
                ),
            )
        if message is not None:
            pending.conversation.append(message)

        return await self._run(
            pending.conversation,
            pending.tools,
            rounds=pending.rounds,
            queued=list(pending.remaining),
        )

    async def _run(
        self,
        conversation: Conversation,
        tools: list[dict[str, Any]],
        rounds: int,
        queued: list[ToolInvocationRequest],
    ) -> str:
        state = LoopState.DISPATCHING_TOOLS if queued else LoopState.AWAITING_MODEL
        answer = ""

        while state is not LoopState.DONE:
            if state is LoopState.AWAITING_MODEL:
                reply = await self.ollama_client.chat(
                    model=self.model,
                    messages=conversation.to_ollama(),
                    tools=tools or None,
                )

                if not reply.has_tool_calls:
                    answer = reply.content
                    state = LoopState.DONE
                    continue

                rounds += 1
                if rounds > self.max_tool_rounds:
                    logger.error(
                        f"Round limit of {self.max_tool_rounds} exceeded, aborting conversation"
                    )
                    raise RoundLimitExceededError(self.max_tool_rounds)

                logger.info(
                    f"Tool call round {rounds}: {len(reply.tool_calls)} calls requested"
                )
                conversation.append(
                    AssistantMessage(
                        content=reply.content,
                        tool_calls=[call.to_ollama() for call in reply.tool_calls],
                    )
                )
                queued = list(reply.tool_calls)
                state = LoopState.DISPATCHING_TOOLS

            elif state is LoopState.DISPATCHING_TOOLS:
                while queued:
                    request = queued.pop(0)
                    message = await self._dispatch(
                        request, conversation, tools, rounds, queued
                    )
                    if message is not None:
                        conversation.append(message)
                state = LoopState.AWAITING_MODEL

        logger.info(f"Conversation finished after {rounds} tool call rounds")
        return answer

    async def _dispatch(
        self,
        request: ToolInvocationRequest,
        conversation: Conversation,
        tools: list[dict[str, Any]],
        rounds: int,
        remaining: list[ToolInvocationRequest],
    ) -> ToolMessage | None:
        """Run one requested tool call.

        Returns:
            The tool message, or None if the request was skipped
        """
        logger.info(f"Tool call: {request.qualified_name} {request.arguments}")

        try:
            server_name, tool_name = request.parse()
        except MalformedToolCallError as e:
            logger.error(f"Invalid tool call, skipping: {e}")
            return None

        if not self.tool_directory.is_connected(server_name):
            logger.error(
                f"Invalid tool call {request.qualified_name}, skipping: "
                f"{UnknownServerError(server_name)}"
            )
            return None

        descriptor = await self.tool_directory.lookup_tool(server_name, tool_name)
        required = descriptor.required if descriptor is not None else []
        arguments = sanitize_arguments(request.arguments, required)

        if descriptor is not None:
            problems = validate_arguments(arguments, descriptor.input_schema)
            if problems:
                logger.warning(
                    f"Arguments for {request.qualified_name} do not match its schema: "
                    f"{'; '.join(problems)}"
                )
                if self.strict_argument_validation:
                    logger.error(f"Skipping tool call {request.qualified_name}")
                    return None

        if self.approval_store is not None and self.approval_store.get(
            server_name, tool_name
        ):
            raise ToolApprovalRequiredError(
                PendingToolCall(
                    server_name=server_name,
                    tool_name=tool_name,
                    arguments=arguments,
                    conversation=conversation,
                    tools=tools,
                    rounds=rounds,
                    remaining=list(remaining),
                )
            )

        try:
            return await self._execute(server_name, tool_name, arguments)
        except UnknownServerError as e:
            logger.error(f"Invalid tool call {request.qualified_name}, skipping: {e}")
            return None

    async def _execute(
        self, server_name: str, tool_name: str, arguments: dict[str, Any]
    ) -> ToolMessage:
        result = await self.tool_directory.invoke(server_name, tool_name, arguments)
        content = reduce_tool_result(result)
        logger.debug(f"Tool {server_name}.{tool_name} returned {len(content)} characters")
        return ToolMessage(tool_name=qualify(server_name, tool_name), content=content)
