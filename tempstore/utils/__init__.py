"""Utility modules for tempstore."""

from .logging import setup_logging

__all__ = [
    "setup_logging",
]
