"""User directory service: HTTP API over a PostgreSQL user table."""
