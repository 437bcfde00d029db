"""Persistence gateway for the users table."""

from directory_api.src.repositories.user_repo import UserRepository

__all__ = ["UserRepository"]
