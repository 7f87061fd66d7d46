"""
Observability for the composition model.

Usage
-----
>>> from blogdoc.monitoring import configure_logging, get_logger
>>> configure_logging()
>>> logger = get_logger(__name__)
"""

from blogdoc.monitoring.logging import (
    bind_post,
    clear_context,
    configure_logging,
    get_bound_post,
    get_logger,
    sanitize_log_message,
)

__all__ = [
    "bind_post",
    "clear_context",
    "configure_logging",
    "get_bound_post",
    "get_logger",
    "sanitize_log_message",
]
