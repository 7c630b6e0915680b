"""intellimcp HTTP API - MCP tools over plain HTTP (no authentication)."""
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intellimcp_core.config import Settings, get_settings

from ..registry import McpToolRegistry
from ..server import configure_logging, create_project_registry
from .routers import tools

logger = logging.getLogger("intellimcp-mcp.api")


def create_app(registry: Optional[McpToolRegistry] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI app; builds a default registry from settings when none is given."""
    settings = settings or get_settings()
    if registry is None:
        registry = McpToolRegistry.create_default(create_project_registry(settings))

    app = FastAPI(
        title="intellimcp API",
        description="MCP tools over HTTP",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.registry = registry

    # CORS middleware - Open for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(tools.router, prefix="/api/v1/tools")

    @app.get("/")
    def root():
        """Root endpoint with server info."""
        return {
            "name": settings.server_name,
            "version": "1.0.0",
            "tools": registry.size(),
            "docs": "/docs",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


def run():
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting intellimcp HTTP API on {settings.http_host}:{settings.http_port}")
    uvicorn.run(create_app(settings=settings), host=settings.http_host, port=settings.http_port)
