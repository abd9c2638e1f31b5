"""Selection flag updates."""

from __future__ import annotations

import logging

from orderlist.logic.catalog_store import CatalogStore
from orderlist.logic.errors import ItemNotFound
from orderlist.logic.events import ITEM_SELECTION_CHANGED, publish

logger = logging.getLogger(__name__)


def set_selected(store: CatalogStore, item_id: int, selected: bool) -> bool:
    """Set the selection flag for ``item_id``.

    Idempotent: re-applying the current state succeeds without an event.
    Raises ItemNotFound for ids that are not part of the Order.
    """
    if not store.contains(item_id):
        raise ItemNotFound(item_id)
    with store.lock.write():
        was_selected = item_id in store.selected
        if selected:
            store.selected.add(item_id)
        else:
            store.selected.discard(item_id)
    if was_selected != bool(selected):
        publish(ITEM_SELECTION_CHANGED, {"id": item_id, "selected": bool(selected)}, store.events)
    return True


__all__ = ["set_selected"]
