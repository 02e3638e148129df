"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog.config import Settings
from blog.interface.api.routes import comments, health, posts
from blog.util.di.container import create_container, setup_di
from blog.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use (tests pass one with in-memory
            persistence); defaults to the production container

    Returns:
        Configured application
    """
    settings = Settings()
    container = container or create_container()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logfire.info("Application started", environment=settings.environment)
        yield
        # Disposes the database engine and other APP-scoped resources
        await container.close()
        logfire.info("Application stopped")

    app_instance = FastAPI(
        title="Blog API",
        description="Backend API for the blog: posts and threaded comments",
        version="0.1.0",
        lifespan=lifespan,
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(comments.router)

    return app_instance
