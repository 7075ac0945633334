"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from opaq.config import Settings
from opaq.interface.api.routes import (
    discussion_interactions,
    discussions,
    health,
    interactions,
    pitches,
)
from opaq.util.di.container import create_container, setup_di
from opaq.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        container: DI container to wire in; the production container is
            built when omitted

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py handles this.
    """
    settings = Settings()

    app_instance = FastAPI(
        title="OPAQ API",
        description="Backend API for OPAQ - interactions, discussions and pitches",
        version="0.1.0",
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Setup dependency injection
    # Settings are loaded from environment automatically
    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(interactions.router)
    app_instance.include_router(discussions.router)
    app_instance.include_router(discussion_interactions.router)
    app_instance.include_router(pitches.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
# In production: start_app.py handles this
# In tests: conftest.py handles this
app = create_app()
