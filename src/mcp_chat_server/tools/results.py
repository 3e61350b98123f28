"""Reduce MCP tool results to the text placed in tool-role messages."""

import json
from typing import Any


def _as_plain(value: Any) -> Any:
    # MCP content parts are pydantic models
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [_as_plain(item) for item in value]
    return value


def _dumps(value: Any) -> str:
    return json.dumps(value, default=str)


def reduce_tool_result(result: Any) -> str:
    """Turn a tool result into a single string.

    For a non-empty list only the first part is used: a "text" part gives
    its text verbatim, a "json" part gives its serialized payload. Any
    other shape is serialized whole.

    Args:
        result: Tool result, usually a list of typed content parts

    Returns:
        The tool message content
    """
    plain = _as_plain(result)

    if isinstance(plain, list) and plain:
        first = plain[0]
        if isinstance(first, dict):
            if first.get("type") == "text":
                return first.get("text", "")
            if first.get("type") == "json":
                return _dumps(first.get("json"))

    return _dumps(plain)
