"""API package."""

from riju_sessions.api.health import router as health_router
from riju_sessions.api.middleware import install_rate_limiting, limiter
from riju_sessions.api.sessions import router as sessions_router

__all__ = [
    "health_router",
    "sessions_router",
    "install_rate_limiting",
    "limiter",
]
