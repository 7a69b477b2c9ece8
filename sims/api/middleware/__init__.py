"""API middleware."""

from sims.api.middleware.error_handler import ErrorHandlerMiddleware
from sims.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
