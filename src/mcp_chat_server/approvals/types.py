"""Data types for tool approval preferences."""

from dataclasses import dataclass


@dataclass
class ToolApproval:
    """Whether a tool needs user confirmation before it runs."""

    server_name: str
    tool_name: str
    requires_approval: bool = False
    updated_at: str = ""
