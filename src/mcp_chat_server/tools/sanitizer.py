"""Argument sanitization for model-emitted tool calls.

Models often send optional parameters as null or "" instead of leaving
them out, which strict MCP schema validators reject. Sanitization drops
those keys before dispatch.
"""

from collections.abc import Iterable
from typing import Any


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def sanitize_arguments(
    arguments: dict[str, Any] | None, required: Iterable[str] = ()
) -> dict[str, Any]:
    """Drop null and empty-string arguments that are not required.

    Keys missing from the schema are passed through unchanged and no type
    coercion happens. Required keys are always kept, even when null.

    Args:
        arguments: Raw arguments from the model
        required: Names listed in the tool schema's "required" array

    Returns:
        A new dict with the empty optional arguments removed
    """
    if not arguments:
        return {}

    required_names = set(required)
    return {
        key: value
        for key, value in arguments.items()
        if key in required_names or not _is_empty(value)
    }
