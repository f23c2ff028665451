"""Services package."""

from riju_sessions.services.session_manager import UserSessionManager

__all__ = [
    "UserSessionManager",
]
