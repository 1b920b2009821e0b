"""Functional test bootstrap.

Every test that needs the HTTP surface gets an app bound to a fresh
in-memory SQLite database, so content created by one test is never visible
to another.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Optional

import pytest
from fastapi.testclient import TestClient

from content_binder.config import AppConfig, BackofficeConfig, DatabaseConfig, RoutingConfig
from content_binder.db.base import DEFAULT_DATABASE_URL, get_engine, reset_engine
from content_binder.logic.events import ModelBindingObserver
from content_binder.logic.model_factory import PublishedModelFactory
from content_binder.main import create_app


def _test_config() -> AppConfig:
    return AppConfig(
        database=DatabaseConfig(dsn=DEFAULT_DATABASE_URL),
        routing=RoutingConfig(),
        backoffice=BackofficeConfig(path="~/umbraco", application_virtual_path="/"),
    )


@pytest.fixture
def engine():
    """A fresh in-memory engine with the content schema applied."""
    reset_engine()
    eng = get_engine(DEFAULT_DATABASE_URL)
    yield eng
    reset_engine()


@pytest.fixture
def make_client() -> Iterator[Callable[..., TestClient]]:
    """Factory returning a TestClient over a freshly built app."""
    clients: List[TestClient] = []

    def _make(
        model_factory: Optional[PublishedModelFactory] = None,
        observers: Optional[Iterable[ModelBindingObserver]] = None,
    ) -> TestClient:
        reset_engine()
        app = create_app(_test_config(), model_factory=model_factory, observers=observers)
        client = TestClient(app)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)
    reset_engine()
