"""FastAPI application factory for the POM reconciler."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from pomreconciler import __version__
from pomreconciler.api.deps import init_runtime, reset_runtime
from pomreconciler.api.middleware import RequestBodyLimitMiddleware, RequestTimingMiddleware
from pomreconciler.api.routers import endpoints, projects, reconcile
from pomreconciler.api.runtime import ReconcileRuntime
from pomreconciler.api.schemas import HealthResponse
from pomreconciler.settings import Settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Build the ReconcileRuntime on startup and release it on shutdown."""
    settings: Settings = app.state.settings
    runtime = ReconcileRuntime.build(settings)
    init_runtime(runtime)
    try:
        yield
    finally:
        runtime.close()
        reset_runtime()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="POM Reconciler",
        description="Structural and semantic diagnostics for project descriptors.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestTimingMiddleware)
    app.add_middleware(RequestBodyLimitMiddleware)

    app.include_router(reconcile.router, prefix="/reconcile", tags=["reconcile"])
    app.include_router(endpoints.router, prefix="/endpoints", tags=["endpoints"])
    app.include_router(projects.router, prefix="/projects", tags=["projects"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger = logging.getLogger("pomreconciler.api")
    logger.info(
        "POM Reconciler API v%s starting (host=%s, port=%d, workspace=%s)",
        __version__, settings.api_server_host, settings.effective_port, settings.workspace_root,
    )

    uvicorn.run(
        "pomreconciler.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
