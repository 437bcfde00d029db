"""
Middleware for the user directory API.

Provides request logging with correlation IDs.
"""

from directory_api.src.middleware.request_logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
