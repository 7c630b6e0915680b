"""Input schema generation for tool arguments.

The schema is derived from the same Arg declarations that validate calls, so
the advertised parameters and the enforced ones cannot drift apart.

Wire shape::

    {"type": "object", "properties": {...}, "required": [...]}

``properties`` is omitted when there are no arguments and ``required`` is
omitted when no argument is required; clients can tell the difference.
"""
import copy
from typing import Any, Optional

from .arg import Arg, SchemaType


class JsonSchemaBuilder:
    """Fluent builder for object schemas describing tool input."""

    def __init__(self):
        self._properties: dict[str, dict[str, Any]] = {}
        self._required: list[str] = []

    @classmethod
    def object(cls) -> "JsonSchemaBuilder":
        return cls()

    def _add(self, name: str, prop: dict[str, Any], required: bool) -> "JsonSchemaBuilder":
        self._properties[name] = prop
        if required and name not in self._required:
            self._required.append(name)
        return self

    def required_string(self, name: str, description: str) -> "JsonSchemaBuilder":
        return self._add(name, {"type": "string", "description": description}, True)

    def optional_string(self, name: str, description: str) -> "JsonSchemaBuilder":
        return self._add(name, {"type": "string", "description": description}, False)

    def required_integer(self, name: str, description: str) -> "JsonSchemaBuilder":
        return self._add(name, {"type": "integer", "description": description}, True)

    def optional_integer(self, name: str, description: str) -> "JsonSchemaBuilder":
        return self._add(name, {"type": "integer", "description": description}, False)

    def required_boolean(self, name: str, description: str) -> "JsonSchemaBuilder":
        return self._add(name, {"type": "boolean", "description": description}, True)

    def optional_boolean(self, name: str, description: str) -> "JsonSchemaBuilder":
        return self._add(name, {"type": "boolean", "description": description}, False)

    def required_string_array(self, name: str, description: str) -> "JsonSchemaBuilder":
        return self._add(name, _string_array(description), True)

    def optional_string_array(self, name: str, description: str) -> "JsonSchemaBuilder":
        return self._add(name, _string_array(description), False)

    def build(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "object"}
        if self._properties:
            schema["properties"] = copy.deepcopy(self._properties)
        if self._required:
            schema["required"] = list(self._required)
        return schema


def _string_array(description: str) -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}, "description": description}


_ADDERS = {
    SchemaType.STRING: ("required_string", "optional_string"),
    SchemaType.INTEGER: ("required_integer", "optional_integer"),
    SchemaType.BOOLEAN: ("required_boolean", "optional_boolean"),
    SchemaType.STRING_ARRAY: ("required_string_array", "optional_string_array"),
}


def build_schema(*args: Arg[Any], builder: Optional[JsonSchemaBuilder] = None) -> dict[str, Any]:
    """Build the input schema for an ordered list of Args."""
    builder = builder or JsonSchemaBuilder.object()
    for arg in args:
        required_adder, optional_adder = _ADDERS[arg.schema_type]
        getattr(builder, required_adder if arg.required else optional_adder)(arg.key, arg.description)
    return builder.build()
