"""
Error taxonomy for the user directory API.

Each error carries the HTTP status code it surfaces as, so the application
exception handlers can render any DirectoryError uniformly.
"""

from typing import Any, Dict, List, Optional

from fastapi import status


class DirectoryError(Exception):
    """Base class for all user directory errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.detail)
        self.message = message or self.detail

    def to_response(self) -> Dict[str, Any]:
        """Build the JSON body returned to the client."""
        return {"detail": self.detail}


class BadRequest(DirectoryError):
    """Malformed or incomplete request body."""

    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid request body"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []

    def to_response(self) -> Dict[str, Any]:
        return {"detail": self.message, "errors": self.errors}


class StoreError(DirectoryError):
    """
    Connection failure, query rejection, or constraint violation in the store.

    The client only sees a generic message; the underlying driver error is
    kept as ``__cause__`` and logged server-side.
    """

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Store operation failed"


class StartupError(DirectoryError):
    """Missing configuration or unreachable store at startup. Fatal."""

    detail = "Startup failed"
