"""Main application entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from riju_sessions import __version__
from riju_sessions.api import health_router, install_rate_limiting, sessions_router
from riju_sessions.config import get_settings
from riju_sessions.k8s.client import KubernetesClient
from riju_sessions.utils import configure_logging

logger = structlog.get_logger()
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    configure_logging(settings.log_level, settings.environment)
    logger.info(
        "starting_application",
        environment=settings.environment,
        namespace=settings.user_namespace,
    )

    # The cluster client is required; fail startup if it cannot be configured.
    await KubernetesClient.get_instance()

    logger.info("application_started_successfully")

    yield

    logger.info("shutting_down_application")
    await KubernetesClient.close_instance()
    logger.info("application_shutdown_complete")


# Create FastAPI application
app = FastAPI(
    title="riju sessions",
    description="Provisioning of per-user session pods",
    version=__version__,
    lifespan=lifespan,
)

# Add rate limiting
install_rate_limiting(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(sessions_router, tags=["Sessions"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "riju sessions",
        "version": __version__,
        "status": "running",
        "environment": settings.environment,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "riju_sessions.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development",
    )
