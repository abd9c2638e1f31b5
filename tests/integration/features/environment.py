"""Behave environment hooks for ordered list integration tests.

Loads `.env.test` through python-dotenv, then picks the HTTP target:
- `TEST_BASE_URL` set: scenarios run against that live server, which must
  expose the `/__test__` support routes.
- otherwise: an in-process application driven by FastAPI's TestClient.
State is reset before every scenario so scenarios stay independent.
"""

from __future__ import annotations

import os
from typing import Any

import httpx
from dotenv import load_dotenv
from fastapi.testclient import TestClient

from orderlist.config import ApiConfig, AppConfig, CatalogConfig
from orderlist.main import create_app

IN_PROCESS_CATALOG_SIZE = 100


def before_all(context: Any) -> None:  # pragma: no cover - executed by Behave
    load_dotenv(override=False)
    load_dotenv(dotenv_path=os.path.join("tests", "integration", ".env.test"), override=False)

    context.api_prefix = os.getenv("TEST_API_PREFIX", "/api").rstrip("/")
    base_url = os.getenv("TEST_BASE_URL", "").strip().rstrip("/")
    if base_url:
        context.http = httpx.Client(base_url=base_url, timeout=10.0)
        try:
            context.http.get("/health")
        except httpx.TransportError as exc:
            raise AssertionError(f"API not reachable at TEST_BASE_URL={base_url}: {exc}")
        context.live = True
    else:
        cfg = AppConfig(
            catalog=CatalogConfig(size=IN_PROCESS_CATALOG_SIZE),
            api=ApiConfig(prefix=context.api_prefix, enable_test_support=True),
        )
        context.http = TestClient(create_app(cfg))
        context.live = False


def before_scenario(context: Any, scenario: Any) -> None:  # pragma: no cover
    resp = context.http.post("/__test__/reset-state")
    assert resp.status_code == 204, f"reset-state failed: {resp.status_code} {resp.text}"
    context.response = None


def after_all(context: Any) -> None:  # pragma: no cover
    http = getattr(context, "http", None)
    if http is not None:
        http.close()
