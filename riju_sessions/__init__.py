"""Per-user session pods for the riju code-execution platform."""

__version__ = "0.1.0"
