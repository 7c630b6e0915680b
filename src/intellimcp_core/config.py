"""Application settings loaded from the environment."""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the MCP server and its HTTP transport.

    Every field can be set with an ``INTELLIMCP_`` prefixed environment
    variable, e.g. ``INTELLIMCP_PROJECTS='["/work/app"]'``.
    """

    server_name: str = "intellimcp"
    log_level: str = "INFO"

    # Project roots opened at startup
    projects: list[str] = Field(default_factory=list)
    projects_file: Optional[str] = None

    http_host: str = "127.0.0.1"
    http_port: int = Field(8765, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(env_prefix="INTELLIMCP_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
