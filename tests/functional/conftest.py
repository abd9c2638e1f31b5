"""Functional test bootstrap.

Builds small in-memory catalogs so contract tests stay fast; the one test
that needs the full one-million-item catalog builds its own store.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from orderlist.config import ApiConfig, AppConfig, CatalogConfig
from orderlist.logic.events import EventBuffer
from orderlist.logic.catalog_store import CatalogStore
from orderlist.main import create_app


def make_config(size: int = 50, **api_overrides) -> AppConfig:
    api = ApiConfig(**{"enable_test_support": True, **api_overrides})
    return AppConfig(catalog=CatalogConfig(size=size), api=api)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def store() -> CatalogStore:
    return CatalogStore(5, events=EventBuffer())


@pytest.fixture
def app_factory():
    def _build(size: int = 50, **api_overrides):
        return create_app(make_config(size=size, **api_overrides))

    return _build


@pytest.fixture
def app(app_factory):
    return app_factory(50)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
