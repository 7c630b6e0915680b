"""One tool's full parameter list: declaration, schema and validation."""
import copy
from typing import Any, Mapping, Optional

from .arg import Arg
from .combinators import ValidatedN, validate
from .schema import build_schema


def format_errors(errors: Mapping[str, str]) -> str:
    """Join error messages in declaration order."""
    return ", ".join(errors.values())


class ToolParameters:
    """
    Ordered Arg declarations for a single tool.

    The schema is built once, when the parameters are declared, and never
    depends on the arguments of any call.

    Raises:
        ValueError: If two Args share a key
    """

    def __init__(self, *args: Arg[Any]):
        keys = [arg.key for arg in args]
        duplicates = sorted({key for key in keys if keys.count(key) > 1})
        if duplicates:
            raise ValueError(f"Duplicate argument keys: {', '.join(duplicates)}")
        self.args = tuple(args)
        self._schema = build_schema(*self.args)

    @property
    def schema(self) -> dict[str, Any]:
        return copy.deepcopy(self._schema)

    @property
    def keys(self) -> list[str]:
        return [arg.key for arg in self.args]

    def get(self, key: str) -> Optional[Arg[Any]]:
        for arg in self.args:
            if arg.key == key:
                return arg
        return None

    def validate(self, arguments: Optional[Mapping[str, Any]]) -> ValidatedN:
        return validate(arguments or {}, *self.args)
