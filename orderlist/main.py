from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from orderlist.config import AppConfig, load_config
from orderlist.http.problem import (
    handle_domain_error,
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from orderlist.http.request_id import RequestIdMiddleware
from orderlist.logging_setup import configure_logging
from orderlist.logic.catalog_store import CatalogStore
from orderlist.logic.errors import OrderListError
from orderlist.logic.events import EventBuffer
from orderlist.middleware.cors import apply_cors
from orderlist.routes import api_router

logger = logging.getLogger(__name__)


def create_app(config: Optional[AppConfig] = None, catalog: Optional[CatalogStore] = None) -> FastAPI:
    """Build the FastAPI application.

    ``config`` defaults to :func:`load_config`; ``catalog`` defaults to a fresh
    store sized from ``config.catalog.size``. The store lives on
    ``app.state.catalog`` for the lifetime of the process. Mutation events are
    buffered on the store only while the test-support routes are mounted.
    """
    configure_logging()
    cfg = config or load_config()
    configure_logging(cfg.logging.level)
    app = FastAPI(title="Ordered List Service")
    app.state.config = cfg
    if catalog is None:
        catalog = CatalogStore(cfg.catalog.size)
    if cfg.api.enable_test_support and catalog.events is None:
        catalog.events = EventBuffer()
    app.state.catalog = catalog
    logger.info(
        "catalog_initialised size=%s prefix=%s",
        app.state.catalog.size,
        cfg.api.prefix or "/",
    )

    app.add_exception_handler(OrderListError, handle_domain_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    apply_cors(app, origins=cfg.api.cors_origins)
    app.add_middleware(RequestIdMiddleware)

    # Routers
    app.include_router(api_router, prefix=cfg.api.prefix)
    if cfg.api.enable_test_support:
        from orderlist.routes.test_support import router as test_support_router

        app.include_router(test_support_router)
        logger.warning("test_support_routes_enabled")

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok", "items": app.state.catalog.size}

    return app


# Intentionally do not instantiate the app at import time to prevent side effects.
