"""
Configuration package.
"""

from .logging import bind_log_context, clear_log_context, configure_logging, get_logger
from .settings import settings

__all__ = [
    "settings",
    "bind_log_context",
    "clear_log_context",
    "configure_logging",
    "get_logger",
]
