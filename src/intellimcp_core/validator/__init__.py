"""Declarative argument validation for tool calls.

Modules:
- validated: Valid/Invalid and Success/Failure result types
- arg: the Arg descriptor
- builders / factories: fluent Arg declarations
- paths: ProjectLocation and ProjectRelativePath
- combinators: error-accumulating combination of up to 7 Args
- schema: input schema generation
- parameters: ToolParameters facade
"""
from .arg import Arg, SchemaType
from .builders import (
    BooleanArgBuilder,
    EnumArgBuilder,
    IntegerArgBuilder,
    StringArgBuilder,
    StringArrayArgBuilder,
)
from .combinators import MAX_ARITY, PendingResult, ValidatedN, collect_errors, validate
from .errors import ErrorKind, PathTraversalError
from .factories import (
    PROJECT_PATH_KEY,
    absolute_path,
    boolean,
    enum_arg,
    integer,
    optional_project_relative_path,
    project,
    project_location,
    project_relative_path,
    string,
    string_array,
)
from .parameters import ToolParameters, format_errors
from .paths import ProjectLocation, ProjectRelativePath, is_traversal, normalize_path
from .schema import JsonSchemaBuilder, build_schema
from .validated import Failure, Invalid, Success, Valid, Validated, ValidatedResult

__all__ = [
    "Arg",
    "SchemaType",
    "BooleanArgBuilder",
    "EnumArgBuilder",
    "IntegerArgBuilder",
    "StringArgBuilder",
    "StringArrayArgBuilder",
    "MAX_ARITY",
    "PendingResult",
    "ValidatedN",
    "collect_errors",
    "validate",
    "ErrorKind",
    "PathTraversalError",
    "PROJECT_PATH_KEY",
    "absolute_path",
    "boolean",
    "enum_arg",
    "integer",
    "optional_project_relative_path",
    "project",
    "project_location",
    "project_relative_path",
    "string",
    "string_array",
    "ToolParameters",
    "format_errors",
    "ProjectLocation",
    "ProjectRelativePath",
    "is_traversal",
    "normalize_path",
    "JsonSchemaBuilder",
    "build_schema",
    "Failure",
    "Invalid",
    "Success",
    "Valid",
    "Validated",
    "ValidatedResult",
]
