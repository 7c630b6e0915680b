"""File operations behind the MCP tools.

Handlers receive already-validated, typed arguments and never see the raw
argument map. They:
- Return a response model from schemas on success
- Raise ToolError for expected failures (missing file, bad range, ...)
- Log every completed operation

Paths reaching a handler are resolved through ProjectRelativePath, so they are
known to lie inside the project root.
"""
import fnmatch
import logging
import os
import re
from pathlib import Path
from typing import Iterator, Optional

from intellimcp_core import Project, ProjectRegistry
from intellimcp_core.validator import ProjectRelativePath

from .schemas import (
    CreateEntryResponse,
    EntryKind,
    FindFileResponse,
    ListProjectsResponse,
    ProjectInfo,
    ReadFileResponse,
    SearchMatch,
    SearchTextResponse,
)

logger = logging.getLogger("intellimcp-mcp.handlers")


class ToolError(Exception):
    """Expected tool failure reported back to the caller as an error result."""


def _relative(path: Path, project: Project) -> str:
    return path.relative_to(project.base_path).as_posix()


def _walk_files(root: Path) -> Iterator[Path]:
    """Files under root in sorted order, skipping hidden directories."""
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for filename in sorted(filenames):
            yield Path(dirpath) / filename


def _search_root(project: Project, directory: Optional[ProjectRelativePath]) -> Path:
    root = directory.resolve(project) if directory is not None else Path(project.base_path)
    if not root.is_dir():
        raise ToolError(f"Directory not found: {root}")
    return root


# ============================================================================
# Project Handlers
# ============================================================================

def handle_list_projects(projects: ProjectRegistry) -> ListProjectsResponse:
    """List all open projects with their root paths."""
    items = [ProjectInfo(name=p.name, base_path=p.base_path) for p in projects.list_projects()]
    logger.info(f"Listed {len(items)} open projects")
    return ListProjectsResponse(projects=items)


# ============================================================================
# File Handlers
# ============================================================================

def handle_read_file(
    file_path: ProjectRelativePath,
    project: Project,
    start_line: Optional[int] = None,
    end_line: Optional[int] = None,
) -> ReadFileResponse:
    """
    Read a file, optionally limited to a 1-based inclusive line range.

    An end line past the end of the file is clamped to the last line.

    Raises:
        ToolError: If the file is missing, is a directory, is not text, or
            the line range is empty
    """
    resolved = file_path.resolve(project)
    if not resolved.exists():
        raise ToolError(f"File not found: {resolved}")
    if resolved.is_dir():
        raise ToolError(f"Path is a directory, not a file: {resolved}")

    try:
        text = resolved.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        raise ToolError(f"Cannot read file (binary or unsupported format): {resolved}")

    lines = text.splitlines()
    total_lines = len(lines)
    start = start_line if start_line is not None else 1
    end = end_line if end_line is not None else total_lines

    if end < start and total_lines > 0:
        raise ToolError(f"endLine ({end}) must be >= startLine ({start})")
    if start > total_lines and total_lines > 0:
        raise ToolError(f"startLine ({start}) is beyond the end of the file ({total_lines} lines)")

    end = min(end, total_lines)
    content = "\n".join(lines[start - 1:end])
    logger.info(f"Read {resolved} lines {start}-{end} of {total_lines}")

    return ReadFileResponse(
        file_path=str(resolved),
        content=content,
        total_lines=total_lines,
        start_line=start,
        end_line=end,
    )


def handle_find_file(
    project: Project,
    pattern: str,
    directory: Optional[ProjectRelativePath],
    max_results: int,
) -> FindFileResponse:
    """
    Find files by glob pattern.

    A pattern without ``/`` matches file names at any depth (``*.py``);
    a pattern with ``/`` matches the path relative to the search directory
    (``src/*/models.py``).
    """
    root = _search_root(project, directory)
    match_path = "/" in pattern

    files: list[str] = []
    truncated = False
    for path in _walk_files(root):
        candidate = path.relative_to(root).as_posix() if match_path else path.name
        if not fnmatch.fnmatchcase(candidate, pattern):
            continue
        if len(files) >= max_results:
            truncated = True
            break
        files.append(_relative(path, project))

    logger.info(f"Found {len(files)} files matching {pattern!r} in {root}")
    return FindFileResponse(files=files, truncated=truncated)


def handle_search_text(
    project: Project,
    query: str,
    is_regex: bool,
    case_sensitive: bool,
    file_patterns: list[str],
    directory: Optional[ProjectRelativePath],
    max_results: int,
) -> SearchTextResponse:
    """
    Search text files line by line.

    Raises:
        ToolError: If ``query`` is not a valid regular expression
    """
    flags = 0 if case_sensitive else re.IGNORECASE
    try:
        matcher = re.compile(query if is_regex else re.escape(query), flags)
    except re.error as e:
        raise ToolError(f"Invalid regex: {e}")

    root = _search_root(project, directory)
    matches: list[SearchMatch] = []
    truncated = False

    for path in _walk_files(root):
        if file_patterns and not any(fnmatch.fnmatchcase(path.name, p) for p in file_patterns):
            continue
        try:
            text = path.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError):
            logger.debug(f"Skipping unreadable file {path}")
            continue

        for line_number, line in enumerate(text.splitlines(), start=1):
            found = matcher.search(line)
            if found is None:
                continue
            if len(matches) >= max_results:
                truncated = True
                break
            matches.append(SearchMatch(
                file_path=_relative(path, project),
                line=line_number,
                column=found.start() + 1,
                text=line,
            ))
        if truncated:
            break

    logger.info(f"Search for {query!r} found {len(matches)} matches in {root}")
    return SearchTextResponse(matches=matches, truncated=truncated)


def handle_create_file_or_directory(
    project: Project,
    path: ProjectRelativePath,
    kind: EntryKind,
    content: Optional[str],
    overwrite: bool,
) -> CreateEntryResponse:
    """
    Create a file (with optional content) or a directory inside the project.

    Missing parent directories are created. Existing files are only replaced
    when ``overwrite`` is set; existing directories are never replaced.

    Raises:
        ToolError: If the target exists and cannot be replaced, or content is
            given for a directory
    """
    resolved = path.resolve(project)
    if resolved == Path(project.base_path):
        raise ToolError("Path must not be the project root")

    existed = resolved.exists()
    if kind == EntryKind.DIRECTORY:
        if content is not None:
            raise ToolError("content can only be given when kind is FILE")
        if existed:
            raise ToolError(f"Path already exists: {resolved}")
        resolved.mkdir(parents=True)
        logger.info(f"Created directory {resolved}")
        return CreateEntryResponse(path=_relative(resolved, project), kind=kind)

    if existed and (resolved.is_dir() or not overwrite):
        raise ToolError(f"Path already exists: {resolved}")

    resolved.parent.mkdir(parents=True, exist_ok=True)
    data = content or ""
    resolved.write_text(data, encoding="utf-8")
    logger.info(f"{'Overwrote' if existed else 'Created'} file {resolved} ({len(data)} chars)")

    return CreateEntryResponse(
        path=_relative(resolved, project),
        kind=kind,
        overwritten=existed,
        size=len(data.encode("utf-8")),
    )
