"""Fluent builders producing typed Arg descriptors.

Each builder collects refinements (``min``, ``max``, ``pattern``) and is frozen
by one terminal call:

- ``required()``: a missing key is an error
- ``optional()``: a missing key yields ``None``
- ``optional(default)``: a missing key yields ``default``

The terminal call snapshots the refinements, so later changes to the builder
never affect an Arg that was already produced.

Extraction order for a present key: type check, then refinements in the order
they were declared, stopping at the first violation.
"""
import enum
import math
import numbers
import re
from typing import Any, Callable, Generic, Mapping, Optional, Sequence, Type, TypeVar

from .arg import Arg, SchemaType
from .errors import ErrorKind
from .validated import Invalid, Valid, Validated

T = TypeVar("T")
E = TypeVar("E", bound=enum.Enum)

_MISSING: Any = object()

Refinement = Callable[[T], Validated[T]]


def _format_default(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return value.name
    return str(value)


def _apply(value: T, refinements: Sequence[Refinement]) -> Validated[T]:
    for refine in refinements:
        result = refine(value)
        if isinstance(result, Invalid):
            return result
    return Valid(value)


class _ArgBuilder(Generic[T]):
    """Shared terminal calls; subclasses supply coercion and refinements."""

    schema_type: SchemaType

    def __init__(self, key: str, description: str):
        self.key = key
        self.description = description
        self._refinements: list[tuple[str, Refinement]] = []

    def _refine(self, name: str, refinement: Refinement) -> None:
        # Re-declaring a refinement replaces it in place
        for index, (existing, _) in enumerate(self._refinements):
            if existing == name:
                self._refinements[index] = (name, refinement)
                return
        self._refinements.append((name, refinement))

    def _is_absent(self, value: Any) -> bool:
        return value is None

    def _coerce(self, value: Any) -> Validated[T]:
        raise NotImplementedError

    def _describe(self, default: Any = _MISSING) -> str:
        if default is _MISSING:
            return self.description
        return f"{self.description} (default: {_format_default(default)})"

    def _check_declaration(self) -> None:
        pass

    def _converter(self) -> Callable[[Any], Validated[T]]:
        self._check_declaration()
        refinements = tuple(refine for _, refine in self._refinements)
        coerce = self._coerce

        def convert(value: Any) -> Validated[T]:
            coerced = coerce(value)
            if isinstance(coerced, Invalid):
                return coerced
            return _apply(coerced.value, refinements)

        return convert

    def required(self) -> Arg[T]:
        key = self.key
        is_absent = self._is_absent
        convert = self._converter()

        def extract(arguments: Mapping[str, Any]) -> Validated[T]:
            value = arguments.get(key)
            if is_absent(value):
                return Invalid(key, f"{key} is required", ErrorKind.MISSING_REQUIRED)
            return convert(value)

        return Arg(key, self._describe(), True, None, self.schema_type, extract)

    def optional(self, default: Any = _MISSING) -> Arg:
        """Freeze as optional; absent keys yield ``default`` or ``None``."""
        key = self.key
        is_absent = self._is_absent
        absent_value = self._absent_value
        convert = self._converter()
        fallback = self._implicit_default() if default is _MISSING else default

        def extract(arguments: Mapping[str, Any]) -> Validated:
            value = arguments.get(key)
            if is_absent(value):
                return Valid(absent_value(fallback))
            return convert(value)

        return Arg(key, self._describe(default), False, self._wire_default(fallback), self.schema_type, extract)

    def _implicit_default(self) -> Any:
        return None

    def _absent_value(self, fallback: Any) -> Any:
        return fallback

    def _wire_default(self, default: Any) -> Any:
        return default


class StringArgBuilder(_ArgBuilder[str]):
    """String argument; blank strings count as absent.

    Numbers are accepted and converted with ``str``.
    """

    schema_type = SchemaType.STRING

    def pattern(self, regex: str, message: Optional[str] = None) -> "StringArgBuilder":
        """Require the whole value to match ``regex``."""
        compiled = re.compile(regex)
        key = self.key
        error = message or f"{key} must match pattern {regex}"

        def check(value: str) -> Validated[str]:
            if compiled.fullmatch(value) is None:
                return Invalid(key, error, ErrorKind.PATTERN_VIOLATION)
            return Valid(value)

        self._refine("pattern", check)
        return self

    def _is_absent(self, value: Any) -> bool:
        return value is None or (isinstance(value, str) and not value.strip())

    def _coerce(self, value: Any) -> Validated[str]:
        if isinstance(value, str):
            return Valid(value)
        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            return Valid(str(value))
        return Invalid(self.key, f"{self.key} must be a string", ErrorKind.TYPE_MISMATCH)


class IntegerArgBuilder(_ArgBuilder[int]):
    """Integer argument; any finite number is truncated toward zero."""

    schema_type = SchemaType.INTEGER

    def __init__(self, key: str, description: str):
        super().__init__(key, description)
        self._min: Optional[int] = None
        self._max: Optional[int] = None

    def min(self, n: int) -> "IntegerArgBuilder":
        key = self.key
        self._min = n

        def check(value: int) -> Validated[int]:
            if value < n:
                return Invalid(key, f"{key} must be at least {n}", ErrorKind.RANGE_VIOLATION)
            return Valid(value)

        self._refine("min", check)
        return self

    def max(self, n: int) -> "IntegerArgBuilder":
        key = self.key
        self._max = n

        def check(value: int) -> Validated[int]:
            if value > n:
                return Invalid(key, f"{key} must be at most {n}", ErrorKind.RANGE_VIOLATION)
            return Valid(value)

        self._refine("max", check)
        return self

    def _check_declaration(self) -> None:
        if self._min is not None and self._max is not None and self._min > self._max:
            raise ValueError(f"{self.key}: min ({self._min}) is greater than max ({self._max})")

    def _coerce(self, value: Any) -> Validated[int]:
        if isinstance(value, numbers.Real) and not isinstance(value, bool):
            if isinstance(value, numbers.Integral):
                return Valid(int(value))
            if math.isfinite(value):
                return Valid(math.trunc(value))
        return Invalid(self.key, f"{self.key} must be an integer", ErrorKind.TYPE_MISMATCH)

    def _describe(self, default: Any = _MISSING) -> str:
        parts = []
        if default is not _MISSING:
            parts.append(f"default: {default}")
        if self._min is not None:
            parts.append(f"min: {self._min}")
        if self._max is not None:
            parts.append(f"max: {self._max}")
        if not parts:
            return self.description
        return f"{self.description} ({', '.join(parts)})"


class BooleanArgBuilder(_ArgBuilder[bool]):
    schema_type = SchemaType.BOOLEAN

    def _coerce(self, value: Any) -> Validated[bool]:
        if isinstance(value, bool):
            return Valid(value)
        return Invalid(self.key, f"{self.key} must be a boolean", ErrorKind.TYPE_MISMATCH)


class EnumArgBuilder(_ArgBuilder[E]):
    """Enum argument matched case-sensitively against member names."""

    schema_type = SchemaType.STRING

    def __init__(self, key: str, description: str, enum_class: Type[E]):
        self.enum_class = enum_class
        self.allowed = [member.name for member in enum_class]
        super().__init__(key, f"{description} (one of: {', '.join(self.allowed)})")

    def _is_absent(self, value: Any) -> bool:
        return value is None or (isinstance(value, str) and not value.strip())

    def _coerce(self, value: Any) -> Validated[E]:
        if isinstance(value, str) and value in self.allowed:
            return Valid(self.enum_class[value])
        return Invalid(
            self.key,
            f"{self.key} must be one of: {', '.join(self.allowed)}",
            ErrorKind.ENUM_VIOLATION,
        )

    def _wire_default(self, default: Any) -> Any:
        return default.name if isinstance(default, enum.Enum) else default


class StringArrayArgBuilder(_ArgBuilder[list]):
    """Array of strings; non-string items are dropped.

    ``optional()`` yields a fresh empty list for a missing key.
    """

    schema_type = SchemaType.STRING_ARRAY

    def _coerce(self, value: Any) -> Validated[list]:
        if isinstance(value, (list, tuple)):
            return Valid([item for item in value if isinstance(item, str)])
        return Invalid(self.key, f"{self.key} must be an array of strings", ErrorKind.TYPE_MISMATCH)

    def _implicit_default(self) -> Any:
        return []

    def _absent_value(self, fallback: Any) -> Any:
        return list(fallback)

    def _describe(self, default: Any = _MISSING) -> str:
        if default is _MISSING or not default:
            return self.description
        return f"{self.description} (default: {', '.join(default)})"
