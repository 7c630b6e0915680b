"""intellimcp core - argument validation, safe paths and open projects.

Modules:
- validator: declarative tool arguments, validation and input schemas
- projects: registry of open projects
- config: environment-based settings
"""

__version__ = "1.0.0"

from . import validator
from .projects import Project, ProjectRegistry, ProjectRegistryError, ProjectResolver

__all__ = ["validator", "Project", "ProjectRegistry", "ProjectRegistryError", "ProjectResolver", "__version__"]
