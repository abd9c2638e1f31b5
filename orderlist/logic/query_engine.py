"""Paginated, searchable reads over the catalog.

Search is a linear case-insensitive substring filter evaluated on every call;
no search index is persisted. The page slice and the ``selected`` flags are
taken under one shared-lock acquisition so a page never mixes two states of
the catalog.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from orderlist.logic.catalog_store import LABEL_PREFIX, CatalogStore, label_for
from orderlist.logic.errors import InvalidInput
from orderlist.models.items import ItemsPage, ListItem

logger = logging.getLogger(__name__)


def _matching_ids(order: List[int], term: str) -> List[int]:
    needle = term.casefold()
    prefix = f"{LABEL_PREFIX} ".casefold()
    return [item_id for item_id in order if needle in prefix + str(item_id)]


def query(
    store: CatalogStore,
    offset: int = 0,
    limit: int = 20,
    term: Optional[str] = None,
) -> ItemsPage:
    """Return the ``[offset, offset + limit)`` slice of the (filtered) Order.

    ``total`` counts every candidate, not just the returned page, so callers
    can tell whether more pages exist. An offset past the end yields an empty
    page rather than an error.
    """
    if offset < 0:
        raise InvalidInput("offset must be a non-negative integer")
    if limit <= 0:
        raise InvalidInput("limit must be a positive integer")

    with store.lock.read():
        if term:
            candidates = _matching_ids(store.order, term)
            total = len(candidates)
            page_ids = candidates[offset : offset + limit]
        else:
            total = len(store.order)
            page_ids = store.order[offset : offset + limit]
        items = [
            ListItem(id=item_id, value=label_for(item_id), selected=item_id in store.selected)
            for item_id in page_ids
        ]

    logger.debug(
        "query offset=%s limit=%s term=%r returned=%s total=%s",
        offset,
        limit,
        term,
        len(items),
        total,
    )
    return ItemsPage(items=items, total=total)


__all__ = ["query"]
