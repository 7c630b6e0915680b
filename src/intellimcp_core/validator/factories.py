"""Entry points for declaring tool arguments.

Typical declaration, at module level next to the tool that uses it::

    FILE_PATH = validator.project_relative_path("filePath", "Relative path to the file")
    START_LINE = validator.integer("startLine", "Start line (1-based)").min(1).optional()
"""
import enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Mapping, Optional, Type, TypeVar

from .arg import Arg, SchemaType
from .builders import (
    BooleanArgBuilder,
    EnumArgBuilder,
    IntegerArgBuilder,
    StringArgBuilder,
    StringArrayArgBuilder,
)
from .errors import ErrorKind
from .paths import ProjectLocation, ProjectRelativePath, is_absolute
from .validated import Invalid, Valid, Validated

if TYPE_CHECKING:
    from ..projects import Project, ProjectResolver

E = TypeVar("E", bound=enum.Enum)

PROJECT_PATH_KEY = "projectPath"
PROJECT_PATH_DESCRIPTION = (
    "Absolute path to the project root directory. Get this value from list_projects if unknown."
)


def string(key: str, description: str) -> StringArgBuilder:
    return StringArgBuilder(key, description)


def integer(key: str, description: str) -> IntegerArgBuilder:
    return IntegerArgBuilder(key, description)


def boolean(key: str, description: str) -> BooleanArgBuilder:
    return BooleanArgBuilder(key, description)


def string_array(key: str, description: str) -> StringArrayArgBuilder:
    return StringArrayArgBuilder(key, description)


def enum_arg(key: str, description: str, enum_class: Type[E]) -> EnumArgBuilder[E]:
    return EnumArgBuilder(key, description, enum_class)


def _text(arguments: Mapping[str, Any], key: str) -> Validated[Optional[str]]:
    """Raw value as text; a missing or blank value yields Valid(None)."""
    value = arguments.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        return Valid(None)
    if not isinstance(value, str):
        return Invalid(key, f"{key} must be a string", ErrorKind.TYPE_MISMATCH)
    return Valid(value)


def _required_text(arguments: Mapping[str, Any], key: str) -> Validated[str]:
    raw = _text(arguments, key)
    if isinstance(raw, Valid) and raw.value is None:
        return Invalid(key, f"{key} is required", ErrorKind.MISSING_REQUIRED)
    return raw


def project(resolver: "ProjectResolver") -> Arg["Project"]:
    """
    Required ``projectPath`` argument resolved to an open project.

    Args:
        resolver: Lookup capability for open projects, called once per extraction

    Returns:
        Arg yielding the matching Project
    """
    key = PROJECT_PATH_KEY

    def extract(arguments: Mapping[str, Any]) -> Validated["Project"]:
        raw = _required_text(arguments, key)
        if isinstance(raw, Invalid):
            return raw
        return ProjectLocation.of(raw.value).resolve_validated(resolver, key)

    return Arg(key, PROJECT_PATH_DESCRIPTION, True, None, SchemaType.STRING, extract)


def project_location(key: str, description: str) -> Arg[ProjectLocation]:
    def extract(arguments: Mapping[str, Any]) -> Validated[ProjectLocation]:
        raw = _required_text(arguments, key)
        if isinstance(raw, Invalid):
            return raw
        if not is_absolute(raw.value):
            return Invalid(key, f"{key} is not absolute", ErrorKind.NOT_ABSOLUTE)
        return Valid(ProjectLocation.of(raw.value))

    return Arg(key, description, True, None, SchemaType.STRING, extract)


def project_relative_path(key: str, description: str) -> Arg[ProjectRelativePath]:
    def extract(arguments: Mapping[str, Any]) -> Validated[ProjectRelativePath]:
        raw = _required_text(arguments, key)
        if isinstance(raw, Invalid):
            return raw
        return ProjectRelativePath.parse(raw.value, key)

    return Arg(key, description, True, None, SchemaType.STRING, extract)


def optional_project_relative_path(key: str, description: str) -> Arg[Optional[ProjectRelativePath]]:
    def extract(arguments: Mapping[str, Any]) -> Validated[Optional[ProjectRelativePath]]:
        raw = _text(arguments, key)
        if isinstance(raw, Invalid) or raw.value is None:
            return raw
        return ProjectRelativePath.parse(raw.value, key)

    return Arg(key, description, False, None, SchemaType.STRING, extract)


def absolute_path(key: str, description: str) -> Arg[Path]:
    def extract(arguments: Mapping[str, Any]) -> Validated[Path]:
        raw = _required_text(arguments, key)
        if isinstance(raw, Invalid):
            return raw
        if not is_absolute(raw.value):
            return Invalid(key, f"{key} is not absolute", ErrorKind.NOT_ABSOLUTE)
        return Valid(Path(raw.value))

    return Arg(key, description, True, None, SchemaType.STRING, extract)
