"""List API routes: paginated reads, selection and reordering.

Handlers are synchronous so FastAPI runs them on its worker thread pool;
the catalog's readers/writer lock keeps concurrent requests consistent.
Domain errors propagate to the problem+json handlers registered in
`orderlist.main`.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from orderlist.logic.catalog_store import CatalogStore
from orderlist.logic.query_engine import query
from orderlist.logic.reorder import move_after
from orderlist.logic.selection import set_selected
from orderlist.models.items import ItemsPage, MutationResult, OrderRequest, SelectRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def get_catalog(request: Request) -> CatalogStore:
    return request.app.state.catalog


@router.get("/items", response_model=ItemsPage, summary="Page through the ordered list")
def get_items(
    request: Request,
    offset: int = Query(0),
    limit: Optional[int] = Query(None),
    q: Optional[str] = Query(None),
    catalog: CatalogStore = Depends(get_catalog),
) -> ItemsPage:
    if limit is None:
        limit = request.app.state.config.api.default_limit
    return query(catalog, offset=offset, limit=limit, term=q or None)


@router.post("/select", response_model=MutationResult, summary="Set an item's selection flag")
def post_select(payload: SelectRequest, catalog: CatalogStore = Depends(get_catalog)) -> MutationResult:
    set_selected(catalog, payload.id, payload.selected)
    return MutationResult(success=True)


@router.post("/order", response_model=MutationResult, summary="Move an item after another item")
def post_order(payload: OrderRequest, catalog: CatalogStore = Depends(get_catalog)) -> MutationResult:
    move_after(catalog, payload.id, payload.after_id)
    logger.info("order_updated id=%s after_id=%s", payload.id, payload.after_id)
    return MutationResult(success=True)


__all__ = ["router", "get_catalog", "get_items", "post_select", "post_order"]
