"""Safe path value types for tool arguments.

- ProjectLocation: absolute project root, trailing separators stripped
- ProjectRelativePath: user-supplied path inside a project root

A ProjectRelativePath can only hold a path that stays inside whatever base it
is later resolved against. The check happens twice:
- at construction, on the normalized relative string (no leading ``..``,
  not absolute)
- at resolution, on the joined and normalized absolute path, which must be
  the base itself or lie underneath it

Symlinks are never resolved.
"""
import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from .errors import ErrorKind, PathTraversalError
from .validated import Invalid, Valid, Validated

if TYPE_CHECKING:
    from ..projects import Project, ProjectResolver

logger = logging.getLogger("intellimcp-core.validator.paths")

PARENT_MARKER = ".."


def normalize_path(path: str) -> str:
    """Strip trailing ``/`` and ``\\`` separators; a bare root is kept."""
    stripped = path.rstrip("/\\")
    if not stripped and path:
        return path[0]
    return stripped


def _as_posix(path: str) -> str:
    return path.replace("\\", "/")


def is_traversal(path: str) -> bool:
    """
    Check whether a relative path escapes its base via leading ``..`` segments.

    Args:
        path: Raw relative path (``/`` or ``\\`` separated)

    Returns:
        True if the normalized path starts with a parent-directory segment
    """
    normalized = posixpath.normpath(_as_posix(path))
    return normalized == PARENT_MARKER or normalized.startswith(PARENT_MARKER + "/")


def is_absolute(path: str) -> bool:
    posix = _as_posix(path)
    # Drive-letter paths (C:/...) count as absolute too
    return posix.startswith("/") or (len(posix) >= 2 and posix[1] == ":" and posix[0].isalpha())


@dataclass(frozen=True)
class ProjectLocation:
    """Absolute path of a project root directory."""

    path: str

    @classmethod
    def of(cls, raw: str) -> "ProjectLocation":
        return cls(normalize_path(raw))

    def resolve(self, resolver: "ProjectResolver") -> Optional["Project"]:
        """Find the open project rooted at this location, if any."""
        return resolver.find_project(self.path)

    def resolve_validated(self, resolver: "ProjectResolver", key: str = "projectPath") -> Validated["Project"]:
        project = self.resolve(resolver)
        if project is None:
            return Invalid(key, f"Project not found at path: {self.path}", ErrorKind.PROJECT_NOT_FOUND)
        return Valid(project)


BaseLike = Union[str, Path, ProjectLocation, "Project"]


def _is_within(base: str, target: str) -> bool:
    """Literal prefix containment of two normalized paths."""
    if base == ".":
        return not is_absolute(target) and not is_traversal(target)
    if base == "/":
        return target.startswith("/")
    return target == base or target.startswith(base + "/")


def _base_path(base: BaseLike) -> str:
    if isinstance(base, ProjectLocation):
        return base.path
    if isinstance(base, (str, Path)):
        return str(base)
    return base.base_path


@dataclass(frozen=True)
class ProjectRelativePath:
    """Path relative to a project root that is guaranteed not to leave it.

    Raises:
        PathTraversalError: If the path is absolute or its normalized form
            starts with ``..``
    """

    relative_path: str

    def __post_init__(self):
        if is_absolute(self.relative_path):
            raise PathTraversalError(
                f"Absolute path is not a project-relative path: {self.relative_path}",
                path=self.relative_path,
            )
        if is_traversal(self.relative_path):
            raise PathTraversalError(
                f"Path is outside the project directory: {self.relative_path}",
                path=self.relative_path,
            )

    @classmethod
    def parse(cls, raw: str, key: str = "path") -> Validated["ProjectRelativePath"]:
        """Build a ProjectRelativePath from user input without raising."""
        if is_absolute(raw) or is_traversal(raw):
            logger.warning(f"Rejected path outside project directory for {key}: {raw!r}")
            return Invalid(key, "Path is outside the project directory", ErrorKind.TRAVERSAL_VIOLATION)
        return Valid(cls(raw))

    def resolve(self, base: BaseLike) -> Path:
        """
        Resolve this path against a project root.

        Args:
            base: Project root as a string, Path, ProjectLocation or Project

        Returns:
            Normalized absolute path under the base

        Raises:
            PathTraversalError: If the resolved path is not contained in the base
        """
        base_path = posixpath.normpath(_as_posix(_base_path(base)))
        resolved = posixpath.normpath(posixpath.join(base_path, _as_posix(self.relative_path)))

        if not _is_within(base_path, resolved):
            logger.warning(f"Resolved path {resolved} escapes project root {base_path}")
            raise PathTraversalError(
                f"Path is outside the project directory: {self.relative_path}",
                path=self.relative_path,
                base=base_path,
            )
        return Path(resolved)
