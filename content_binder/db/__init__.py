"""Database bootstrap for the content store."""

from content_binder.db.base import DEFAULT_DATABASE_URL, get_engine, reset_engine

__all__ = ["DEFAULT_DATABASE_URL", "get_engine", "reset_engine"]
