"""FastAPI service for the user directory.

This package provides REST API endpoints for listing and creating users,
plus static file serving for the companion front-end.
"""
