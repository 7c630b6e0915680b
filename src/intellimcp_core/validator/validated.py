"""Two-case results for argument extraction and aggregate validation.

- ``Valid`` / ``Invalid``: outcome of extracting a single argument
- ``Success`` / ``Failure``: outcome of combining several extractions

Both pairs are eliminated with ``fold``, which makes the caller handle the
failure branch; the unions expose no other way to reach the value.
"""
from dataclasses import dataclass, field
from typing import Callable, Generic, Mapping, TypeVar, Union

from .errors import ErrorKind

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Successfully extracted argument value."""

    value: T

    def fold(self, on_valid: Callable[[T], R], on_invalid: Callable[[str, str], R]) -> R:
        return on_valid(self.value)


@dataclass(frozen=True)
class Invalid(Generic[T]):
    """Rejected argument: the offending key and a human-readable message."""

    key: str
    message: str
    kind: ErrorKind = field(default=ErrorKind.TYPE_MISMATCH, compare=False)

    def fold(self, on_valid: Callable[[T], R], on_invalid: Callable[[str, str], R]) -> R:
        return on_invalid(self.key, self.message)


Validated = Union[Valid[T], Invalid[T]]


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    def fold(self, on_success: Callable[[T], R], on_failure: Callable[[Mapping[str, str]], R]) -> R:
        return on_success(self.value)


@dataclass(frozen=True)
class Failure(Generic[T]):
    """Every argument error of one call, keyed by argument in declaration order."""

    errors: Mapping[str, str]

    def fold(self, on_success: Callable[[T], R], on_failure: Callable[[Mapping[str, str]], R]) -> R:
        return on_failure(self.errors)


ValidatedResult = Union[Success[T], Failure[T]]
