"""Data models for the FastAPI service.

This package contains Pydantic models for request/response validation
and the User domain record.
"""

from directory_api.src.models.user import NewUser, User

__all__ = ["NewUser", "User"]
