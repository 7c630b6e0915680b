"""Registry of open projects.

Tools never touch the registry directly: argument extraction looks projects up
through the ``ProjectResolver`` protocol, so the validation core stays free of
I/O and locking. The registry itself serializes access with a lock.
"""
import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Protocol

import yaml

from .validator.paths import normalize_path

logger = logging.getLogger("intellimcp-core.projects")


@dataclass(frozen=True)
class Project:
    """An open project: a display name and its root directory."""

    name: str
    base_path: str


class ProjectResolver(Protocol):
    """Capability for looking up an open project by its root path."""

    def find_project(self, path: str) -> Optional[Project]:
        ...


class ProjectRegistryError(Exception):
    """Raised when a project registry file cannot be loaded."""


class ProjectRegistry:
    """Thread-safe set of open projects keyed by normalized root path."""

    def __init__(self, roots: Iterable[str] = ()):
        self._lock = threading.RLock()
        self._projects: dict[str, Project] = {}
        for root in roots:
            self.open_project(root)

    def open_project(self, path: str, name: Optional[str] = None) -> Project:
        """Register a project root; re-opening an existing root returns it unchanged."""
        base_path = normalize_path(os.path.abspath(os.path.expanduser(path)))
        with self._lock:
            existing = self._projects.get(base_path)
            if existing is not None:
                return existing
            project = Project(name=name or Path(base_path).name or base_path, base_path=base_path)
            self._projects[base_path] = project
        logger.info(f"Opened project {project.name} at {base_path}")
        return project

    def close_project(self, path: str) -> bool:
        with self._lock:
            removed = self._projects.pop(normalize_path(path), None)
        if removed is not None:
            logger.info(f"Closed project {removed.name}")
        return removed is not None

    def find_project(self, path: str) -> Optional[Project]:
        with self._lock:
            return self._projects.get(normalize_path(path))

    def list_projects(self) -> list[Project]:
        with self._lock:
            return sorted(self._projects.values(), key=lambda p: p.base_path)

    def __len__(self) -> int:
        with self._lock:
            return len(self._projects)

    def load_file(self, projects_file: str) -> int:
        """
        Open every project listed in a YAML file.

        The file holds either a list of root paths or a mapping with a
        ``projects`` list whose entries are paths or ``{path, name}`` mappings.

        Args:
            projects_file: Path to the YAML file

        Returns:
            Number of project entries read

        Raises:
            ProjectRegistryError: If the file is missing or malformed
        """
        try:
            with open(projects_file, encoding="utf-8") as handle:
                data = yaml.safe_load(handle)
        except OSError as e:
            raise ProjectRegistryError(f"Cannot read projects file {projects_file}: {e}") from e
        except yaml.YAMLError as e:
            raise ProjectRegistryError(f"Invalid YAML in projects file {projects_file}: {e}") from e

        if isinstance(data, dict):
            data = data.get("projects", [])
        if data is None:
            data = []
        if not isinstance(data, list):
            raise ProjectRegistryError(f"Projects file {projects_file} must contain a list of projects")

        for entry in data:
            if isinstance(entry, str):
                self.open_project(entry)
            elif isinstance(entry, dict) and isinstance(entry.get("path"), str):
                self.open_project(entry["path"], name=entry.get("name"))
            else:
                raise ProjectRegistryError(f"Invalid project entry in {projects_file}: {entry!r}")

        logger.info(f"Loaded {len(data)} projects from {projects_file}")
        return len(data)
