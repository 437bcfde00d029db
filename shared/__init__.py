"""Code shared across user directory services."""
