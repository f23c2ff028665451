"""Rate limiting middleware."""

from fastapi import FastAPI
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from riju_sessions.config import get_settings

settings = get_settings()

# Applies to every route without its own limit; probes are exempted in health.py.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_per_minute}/minute"],
)

# Creating a session starts a pod, so it gets a tighter per-client budget.
session_create_limit = settings.session_create_rate_limit


def install_rate_limiting(app: FastAPI) -> None:
    """Attach the limiter, its default-limit middleware and the 429 handler."""
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
