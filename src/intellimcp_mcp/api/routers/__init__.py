"""API routers."""
from . import tools

__all__ = ["tools"]
