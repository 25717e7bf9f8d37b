"""API middleware."""

from studio.api.middleware.error_handler import ErrorHandlerMiddleware
from studio.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
