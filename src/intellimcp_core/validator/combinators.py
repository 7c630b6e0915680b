"""Applicative combination of independent argument validations.

Every extractor runs, every failure is collected, and the caller's function
only runs when all arguments are valid::

    validate(arguments, FILE_PATH, PROJECT, START_LINE).map_n(
        lambda file_path, project, start_line: read(...)
    ).or_else_errors(lambda errors: error_result(format_errors(errors)))

A single call combines between 1 and ``MAX_ARITY`` arguments.
"""
import logging
from typing import Any, Callable, Generic, Mapping, Sequence, TypeVar

from .arg import Arg
from .validated import Failure, Invalid, Success, Validated, ValidatedResult

logger = logging.getLogger("intellimcp-core.validator.combinators")

R = TypeVar("R")
S = TypeVar("S")

MAX_ARITY = 7


def collect_errors(results: Sequence[Validated[Any]]) -> dict[str, str]:
    """Gather every Invalid as key -> message, preserving result order."""
    errors: dict[str, str] = {}
    for result in results:
        if isinstance(result, Invalid):
            errors[result.key] = result.message
    return errors


class PendingResult(Generic[R]):
    """Outcome of ``map_n``; resolving it requires a failure handler."""

    def __init__(self, result: ValidatedResult[R]):
        self._result = result

    def or_else_errors(self, handler: Callable[[Mapping[str, str]], R]) -> R:
        return self._result.fold(lambda value: value, handler)

    def fold(self, on_success: Callable[[R], S], on_failure: Callable[[Mapping[str, str]], S]) -> S:
        return self._result.fold(on_success, on_failure)


class ValidatedN:
    """Between 1 and MAX_ARITY independent Validated values, in declaration order."""

    def __init__(self, *results: Validated[Any]):
        if not 1 <= len(results) <= MAX_ARITY:
            raise TypeError(f"Can combine 1 to {MAX_ARITY} validations, got {len(results)}")
        self._results = results

    def __len__(self) -> int:
        return len(self._results)

    def map_n(self, f: Callable[..., R]) -> PendingResult[R]:
        """
        Apply ``f`` to the unwrapped values if every validation succeeded.

        Args:
            f: Function taking one positional argument per validation

        Returns:
            PendingResult holding Success(f(...)) or Failure(all errors)
        """
        errors = collect_errors(self._results)
        if errors:
            logger.debug(f"Argument validation failed for: {', '.join(errors)}")
            return PendingResult(Failure(errors))
        return PendingResult(Success(f(*(result.value for result in self._results))))


def validate(arguments: Mapping[str, Any], *args: Arg[Any]) -> ValidatedN:
    """
    Run every Arg's extractor against the raw arguments.

    Args:
        arguments: Raw key/value map from the tool call
        *args: 1 to MAX_ARITY argument descriptors

    Returns:
        ValidatedN combining all extraction results

    Raises:
        TypeError: If the number of args is outside 1..MAX_ARITY
    """
    if not 1 <= len(args) <= MAX_ARITY:
        raise TypeError(f"validate() takes 1 to {MAX_ARITY} args, got {len(args)}")
    arguments = arguments or {}
    return ValidatedN(*(arg.extract(arguments) for arg in args))
