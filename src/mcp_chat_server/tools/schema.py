"""Argument value kinds and JSON Schema checks for tool arguments.

Validation is a separate step from sanitization: it reports problems but
never changes the arguments.
"""

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, create_model


class ValueKind(str, Enum):
    """JSON value kinds a tool argument can take."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"

    @classmethod
    def of(cls, value: Any) -> "ValueKind":
        """Classify a decoded JSON value.

        Raises:
            TypeError: If the value is not a JSON value
        """
        # bool is a subclass of int
        if isinstance(value, bool):
            return cls.BOOLEAN
        if value is None:
            return cls.NULL
        if isinstance(value, int):
            return cls.INTEGER
        if isinstance(value, float):
            return cls.NUMBER
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, dict):
            return cls.OBJECT
        if isinstance(value, (list, tuple)):
            return cls.ARRAY
        raise TypeError(f"Not a JSON value: {type(value).__name__}")

    @property
    def python_type(self) -> Any:
        """Annotation pydantic validates values of this kind against."""
        return _PYTHON_TYPES[self]


_PYTHON_TYPES: dict[ValueKind, Any] = {
    ValueKind.STRING: str,
    ValueKind.INTEGER: int,
    ValueKind.NUMBER: float,
    ValueKind.BOOLEAN: bool,
    ValueKind.OBJECT: dict[str, Any],
    ValueKind.ARRAY: list[Any],
    ValueKind.NULL: None,
}


def _declared_kinds(property_schema: Any) -> list[ValueKind]:
    if not isinstance(property_schema, dict):
        return []
    declared = property_schema.get("type")
    if declared is None:
        return []
    names = declared if isinstance(declared, list) else [declared]

    kinds = []
    for name in names:
        try:
            kinds.append(ValueKind(name))
        except ValueError:
            continue
    return kinds


def _field_type(kinds: list[ValueKind]) -> Any:
    if not kinds:
        return Any
    if len(kinds) == 1:
        return kinds[0].python_type
    return Union[tuple(kind.python_type for kind in kinds)]


def build_arguments_model(input_schema: dict[str, Any]) -> type[BaseModel]:
    """Create a strict pydantic model for the top level of a tool schema.

    Fields are keyed by alias so that property names which are not valid
    Python identifiers still validate. Unknown keys are ignored.
    """
    properties = input_schema.get("properties") or {}
    required = set(input_schema.get("required") or [])

    fields: dict[str, Any] = {}
    for index, name in enumerate([*properties, *sorted(required - properties.keys())]):
        field_type = _field_type(_declared_kinds(properties.get(name)))
        if name in required:
            fields[f"arg_{index}"] = (field_type, Field(..., alias=name))
        else:
            fields[f"arg_{index}"] = (field_type, Field(default=None, alias=name))

    return create_model(
        "ToolArguments",
        __config__=ConfigDict(strict=True, extra="ignore"),
        **fields,
    )


def _describe(value: Any) -> str:
    try:
        return ValueKind.of(value).value
    except TypeError:
        return type(value).__name__


def validate_arguments(
    arguments: dict[str, Any], input_schema: dict[str, Any] | None
) -> list[str]:
    """Check arguments against a tool's input schema.

    Only the top level is checked: required keys must be present and
    values of declared properties must match the declared type. Unknown
    keys and untyped properties are accepted.

    Args:
        arguments: Sanitized tool arguments
        input_schema: The tool's JSON Schema (may be None)

    Returns:
        List of human readable problems, empty when the arguments are valid
    """
    if not input_schema:
        return []

    model = build_arguments_model(input_schema)
    try:
        model.model_validate(arguments)
    except ValidationError as e:
        properties = input_schema.get("properties") or {}
        problems: list[str] = []
        reported: set[str] = set()

        for error in e.errors():
            name = str(error["loc"][0])
            if name in reported:
                continue
            reported.add(name)

            if error["type"] == "missing":
                problems.append(f"missing required argument '{name}'")
                continue

            expected = " or ".join(
                kind.value for kind in _declared_kinds(properties.get(name))
            )
            problems.append(
                f"argument '{name}' should be {expected}, "
                f"got {_describe(arguments.get(name))}"
            )
        return problems

    return []
