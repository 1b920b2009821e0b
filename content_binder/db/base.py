"""SQLAlchemy engine for the content store.

SQLite in-memory is the default so the service and its tests run without a
database server; any SQLAlchemy URL may be supplied through configuration.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from content_binder.logic.repository_content import ensure_schema

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+pysqlite:///:memory:"

# Module-level cached Engine shared by every repository call
_ENGINE: Engine | None = None
_ENGINE_URL: str | None = None


def get_engine(url: str | None = None) -> Engine:
    """Return a singleton Engine for `url`, creating the schema on first use.

    In-memory SQLite uses a StaticPool so one connection (and so one
    database) is shared across threads.
    """
    global _ENGINE, _ENGINE_URL
    resolved_url = url or _ENGINE_URL or DEFAULT_DATABASE_URL

    if _ENGINE is None or _ENGINE_URL != resolved_url:
        kwargs: dict = {"future": True, "pool_pre_ping": True}
        if resolved_url.startswith("sqlite") and ":memory:" in resolved_url:
            kwargs.update({
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            })
        if _ENGINE is not None:
            _ENGINE.dispose()
        _ENGINE = create_engine(resolved_url, **kwargs)
        _ENGINE_URL = resolved_url
        ensure_schema(_ENGINE)
        logger.info("db.engine_created dialect=%s", _ENGINE.dialect.name)

    return _ENGINE


def reset_engine() -> None:
    """Dispose of the cached Engine; the next `get_engine` starts afresh."""
    global _ENGINE, _ENGINE_URL
    if _ENGINE is not None:
        _ENGINE.dispose()
    _ENGINE = None
    _ENGINE_URL = None
