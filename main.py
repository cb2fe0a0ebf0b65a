"""
Interview Navigator - Mock Interview Marketplace API

Main application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from interview_navigator.api.dependencies import build_services, shutdown, startup
from interview_navigator.api.router import api_router
from interview_navigator.config.settings import Settings, get_settings
from interview_navigator.core.clock import Clock, utcnow
from interview_navigator.storage import DocumentStore

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
    clock: Clock = utcnow,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        store: Document store to use instead of the configured backend
        clock: Time source for all services
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        # Startup
        logger.info(f"Starting {settings.app_name}...")
        logger.info(f"Running in {'debug' if settings.debug else 'production'} mode")
        logger.info(f"Storage backend: {settings.storage_backend}")

        services = build_services(settings, store=store, clock=clock)
        await startup(services)
        app.state.services = services

        yield

        # Shutdown
        logger.info(f"Shutting down {settings.app_name}...")
        await shutdown(services)

    app = FastAPI(
        title=settings.app_name,
        description="Marketplace API for booking and reviewing human mock interviewers",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app


app = create_app()


# ============================================================================
# RUN SERVER
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
