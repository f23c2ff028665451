"""Utility helpers."""

from riju_sessions.utils.logging_config import configure_logging

__all__ = ["configure_logging"]
