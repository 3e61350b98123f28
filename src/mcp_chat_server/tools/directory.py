"""Directory of tools across all connected MCP servers.

The ToolDirectory owns one MCP client session per server and presents
their tools under a single flat namespace of qualified names
("server.tool"). Failures of individual servers while connecting or
listing are logged and isolated; partial availability is normal.
"""

import asyncio
import logging
from contextlib import AsyncExitStack
from typing import Any

from mcp import ClientSession
from mcp.client.streamable_http import streamablehttp_client

from mcp_chat_server.config import McpServerConfig
from mcp_chat_server.exceptions import ToolExecutionError, UnknownServerError
from mcp_chat_server.tools.types import ToolDescriptor

logger = logging.getLogger(__name__)


class ToolDirectory:
    """Connects to MCP servers and lists, looks up and invokes their tools.

    Sessions are registered at application startup and closed at shutdown;
    in between the registry is only read, so it can be shared by
    concurrently handled chat requests.

    Attributes:
        tool_call_timeout: Seconds to wait for a single tool call, or None
        _sessions: Registered sessions keyed by server name
        _exit_stacks: Per-server exit stacks owning the transports
    """

    def __init__(self, tool_call_timeout: float | None = None) -> None:
        """Initialize an empty tool directory.

        Args:
            tool_call_timeout: Optional per-call timeout in seconds
        """
        self.tool_call_timeout = tool_call_timeout
        self._sessions: dict[str, Any] = {}
        self._exit_stacks: dict[str, AsyncExitStack] = {}

    @property
    def server_names(self) -> list[str]:
        return list(self._sessions)

    def is_connected(self, server_name: str) -> bool:
        return server_name in self._sessions

    def register_session(
        self,
        server_name: str,
        session: Any,
        exit_stack: AsyncExitStack | None = None,
    ) -> None:
        """Register an initialized session under a server name.

        Args:
            server_name: Name used as the qualified name prefix
            session: Object exposing list_tools() and call_tool()
            exit_stack: Optional stack to close on disconnect
        """
        self._sessions[server_name] = session
        if exit_stack is not None:
            self._exit_stacks[server_name] = exit_stack

    async def connect(self, servers: list[McpServerConfig]) -> None:
        """Connect to every server that has an endpoint URL.

        A failure for one server is logged and does not prevent the others
        from connecting.

        Args:
            servers: Server configurations to connect to
        """
        for server in servers:
            if not server.url:
                logger.debug(f"Skipping MCP server {server.name}: no url configured")
                continue

            if server.name in self._sessions:
                logger.warning(f"MCP server {server.name} is already connected")
                continue

            exit_stack = AsyncExitStack()
            try:
                read_stream, write_stream, _ = await exit_stack.enter_async_context(
                    streamablehttp_client(server.url)
                )
                session = await exit_stack.enter_async_context(
                    ClientSession(read_stream, write_stream)
                )
                await session.initialize()
            except Exception as e:
                logger.error(f"Failed to connect to MCP server {server.name}: {e}")
                await self._close_stack(server.name, exit_stack)
                continue

            self.register_session(server.name, session, exit_stack)
            logger.info(f"Connected to MCP server: {server.name} at {server.url}")

    async def _list_server_tools(
        self, server_name: str, session: Any
    ) -> list[ToolDescriptor]:
        response = await session.list_tools()
        tools = response.tools if hasattr(response, "tools") else response
        return [ToolDescriptor.from_mcp_tool(tool, server_name) for tool in tools]

    async def list_all_tools(self) -> list[ToolDescriptor]:
        """List the tools of every connected server.

        Servers whose listing fails contribute no tools.

        Returns:
            list[ToolDescriptor]: Tools from all servers that answered
        """
        all_tools: list[ToolDescriptor] = []

        for server_name, session in list(self._sessions.items()):
            try:
                server_tools = await self._list_server_tools(server_name, session)
            except Exception as e:
                logger.error(f"Failed to get tools from {server_name}: {e}")
                continue

            logger.debug(f"Listed {len(server_tools)} tools from {server_name}")
            all_tools.extend(server_tools)

        return all_tools

    async def lookup_tool(
        self, server_name: str, tool_name: str
    ) -> ToolDescriptor | None:
        """Find a single tool's descriptor.

        Returns:
            ToolDescriptor | None: The descriptor, or None if the server is
            unknown, its listing fails, or it has no such tool
        """
        session = self._sessions.get(server_name)
        if session is None:
            logger.error(f"No MCP session found for server: {server_name}")
            return None

        try:
            server_tools = await self._list_server_tools(server_name, session)
        except Exception as e:
            logger.error(f"Failed to get tools from {server_name}: {e}")
            return None

        for tool in server_tools:
            if tool.tool_name == tool_name:
                return tool
        return None

    async def invoke(
        self, server_name: str, tool_name: str, arguments: dict[str, Any]
    ) -> Any:
        """Call a tool on a connected server.

        Args:
            server_name: Name of the server hosting the tool
            tool_name: Unqualified tool name
            arguments: Sanitized tool arguments

        Returns:
            The tool result content (usually a list of typed parts)

        Raises:
            UnknownServerError: If no session is registered for server_name
            ToolExecutionError: If the call fails, times out or the server
                reports an error result
        """
        session = self._sessions.get(server_name)
        if session is None:
            raise UnknownServerError(server_name)

        logger.info(
            f"Calling tool {tool_name} on server {server_name} with args: {arguments}"
        )

        try:
            if self.tool_call_timeout is not None:
                response = await asyncio.wait_for(
                    session.call_tool(tool_name, arguments),
                    timeout=self.tool_call_timeout,
                )
            else:
                response = await session.call_tool(tool_name, arguments)
        except asyncio.TimeoutError as e:
            logger.error(f"Tool {tool_name} on {server_name} timed out")
            raise ToolExecutionError(
                server_name,
                tool_name,
                f"timed out after {self.tool_call_timeout} seconds",
            ) from e
        except Exception as e:
            logger.error(f"Failed to call tool {tool_name} on {server_name}: {e}")
            raise ToolExecutionError(server_name, tool_name, str(e)) from e

        content = getattr(response, "content", response)
        if getattr(response, "isError", False):
            logger.error(f"Tool {tool_name} on {server_name} returned an error result")
            raise ToolExecutionError(
                server_name, tool_name, f"server reported an error: {content}"
            )

        return content

    async def _close_stack(self, server_name: str, exit_stack: AsyncExitStack) -> None:
        try:
            await exit_stack.aclose()
        except Exception as e:
            logger.warning(f"Error closing MCP session for {server_name}: {e}")

    async def disconnect_all(self) -> None:
        """Close every session. Safe to call more than once."""
        exit_stacks = list(self._exit_stacks.items())
        self._exit_stacks.clear()
        self._sessions.clear()

        # Close in reverse order of connection
        for server_name, exit_stack in reversed(exit_stacks):
            await self._close_stack(server_name, exit_stack)

        logger.info("Disconnected from all MCP servers")
