"""Configuration module for mcp-chat-server using pydantic-settings."""

from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class McpServerConfig(BaseModel):
    """Connection details for one remote MCP tool server."""

    name: str = Field(description="Server name, used as the tool name prefix")
    url: str = Field(default="", description="Streamable HTTP endpoint URL")


class McpChatSettings(BaseSettings):
    """Main configuration settings for mcp-chat-server.

    All settings can be overridden via environment variables with the MCP_CHAT_ prefix.
    For example, MCP_CHAT_OLLAMA_HOST will override the ollama_host setting.
    MCP servers are given as JSON, e.g.
    MCP_CHAT_MCP_SERVERS='[{"name": "weather", "url": "http://localhost:9001/mcp"}]'.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Ollama
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    # MCP tool servers
    mcp_servers: list[McpServerConfig] = Field(default_factory=list)
    tool_call_timeout: float | None = 60.0

    # Conversation loop
    max_tool_rounds: int = Field(default=10, ge=1)
    strict_argument_validation: bool = False

    # Tool approvals
    approvals_enabled: bool = True
    pending_approval_ttl: int = 900

    # Data directories (relative to data_dir)
    data_dir: str = "."
    approvals_file: str = "tool_approvals.json"

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="MCP_CHAT_")

    @property
    def resolved_approvals_file(self) -> Path:
        """Get the full path to the tool approvals file."""
        return Path(self.data_dir) / self.approvals_file
