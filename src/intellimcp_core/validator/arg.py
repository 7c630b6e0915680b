"""Argument descriptor shared by validation and schema generation."""
import enum
from dataclasses import dataclass
from typing import Any, Callable, Generic, Mapping, TypeVar

from .validated import Validated

T = TypeVar("T")

Extractor = Callable[[Mapping[str, Any]], Validated[T]]


class SchemaType(str, enum.Enum):
    """Wire-level JSON type of an argument."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    STRING_ARRAY = "array"

    @property
    def json_type(self) -> str:
        return self.value


@dataclass(frozen=True)
class Arg(Generic[T]):
    """
    One named tool parameter.

    Attributes:
        key: Argument name in the raw arguments map
        description: Human-readable description, including enforced constraints
        required: Whether a missing key is an error
        default_value: Value used when the key is absent (wire-level form)
        schema_type: JSON type advertised in the input schema
        extractor: Pure function turning the raw map into a Validated value
    """

    key: str
    description: str
    required: bool
    default_value: Any
    schema_type: SchemaType
    extractor: Extractor[T]

    def extract(self, arguments: Mapping[str, Any]) -> Validated[T]:
        return self.extractor(arguments)
