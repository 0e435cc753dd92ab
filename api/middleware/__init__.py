"""
Middleware
"""
from .error_handler import add_error_handlers
from .logging import add_logging_middleware, LoggingMiddleware

__all__ = [
    "add_error_handlers",
    "add_logging_middleware",
    "LoggingMiddleware"
]
