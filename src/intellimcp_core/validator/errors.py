"""Error taxonomy for argument validation and path safety.

Argument problems are never raised: they travel as ``Invalid`` values tagged
with an ``ErrorKind`` and are aggregated by the combinators. Only the path
guard raises, when code tries to build or resolve a path that escapes its
project root.
"""
import enum
from typing import Optional


class ErrorKind(str, enum.Enum):
    """Category of a single argument validation failure."""

    MISSING_REQUIRED = "missing_required"
    TYPE_MISMATCH = "type_mismatch"
    RANGE_VIOLATION = "range_violation"
    PATTERN_VIOLATION = "pattern_violation"
    ENUM_VIOLATION = "enum_violation"
    TRAVERSAL_VIOLATION = "traversal_violation"
    NOT_ABSOLUTE = "not_absolute"
    PROJECT_NOT_FOUND = "project_not_found"


class PathTraversalError(Exception):
    """Raised when a relative path would escape its project root."""

    def __init__(self, message: str, path: str, base: Optional[str] = None):
        super().__init__(message)
        self.path = path
        self.base = base
