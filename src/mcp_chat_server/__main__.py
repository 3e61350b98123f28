"""CLI entry point for mcp-chat-server.

This module provides the command-line interface for starting the mcp-chat-server.
It can be invoked as `mcp-chat-server` (via the script entry point) or
`python -m mcp_chat_server`.
"""

import argparse
import logging
import sys

import uvicorn

from mcp_chat_server import __version__, create_app
from mcp_chat_server.config import McpChatSettings, McpServerConfig


def parse_server(value: str) -> McpServerConfig:
    """Parse a NAME=URL command-line value into a server config."""
    name, separator, url = value.partition("=")
    if not separator or not name or not url:
        raise argparse.ArgumentTypeError(
            f"invalid MCP server '{value}', expected NAME=URL"
        )
    return McpServerConfig(name=name, url=url)


def main() -> None:
    """Main entry point for the mcp-chat-server CLI.

    Parses command-line arguments and starts the uvicorn server with the
    FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="mcp-chat-server",
        description="Headless FastAPI server for Ollama conversations with MCP tools",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"mcp-chat-server {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via MCP_CHAT_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via MCP_CHAT_PORT)",
    )

    parser.add_argument(
        "--ollama-host",
        type=str,
        default=None,
        help="Ollama server URL (default: http://localhost:11434, can be set via MCP_CHAT_OLLAMA_HOST)",
    )

    parser.add_argument(
        "--model",
        type=str,
        default=None,
        help="Ollama model to chat with (default: llama3.2, can be set via MCP_CHAT_OLLAMA_MODEL)",
    )

    parser.add_argument(
        "--mcp-server",
        type=parse_server,
        action="append",
        default=None,
        metavar="NAME=URL",
        help="MCP server to connect to; repeatable (can be set via MCP_CHAT_MCP_SERVERS as JSON)",
    )

    parser.add_argument(
        "--max-tool-rounds",
        type=int,
        default=None,
        help="Maximum tool-call rounds per chat (default: 10, can be set via MCP_CHAT_MAX_TOOL_ROUNDS)",
    )

    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Base directory for all data (default: ., can be set via MCP_CHAT_DATA_DIR)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via MCP_CHAT_LOG_LEVEL)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.ollama_host is not None:
        settings_kwargs["ollama_host"] = args.ollama_host
    if args.model is not None:
        settings_kwargs["ollama_model"] = args.model
    if args.mcp_server is not None:
        settings_kwargs["mcp_servers"] = args.mcp_server
    if args.max_tool_rounds is not None:
        settings_kwargs["max_tool_rounds"] = args.max_tool_rounds
    if args.data_dir is not None:
        settings_kwargs["data_dir"] = args.data_dir
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = McpChatSettings(**settings_kwargs)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Create the FastAPI app
    app = create_app(settings=settings)

    # Start uvicorn
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    sys.exit(main())
