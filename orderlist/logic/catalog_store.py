"""In-memory catalog: the global Order and the Selection Set.

The store is the single source of truth for item position and selection.
Items are never materialised as objects; an id and its label ``"Item {id}"``
are enough, and ``selected`` is derived from set membership at read time.
Other logic modules read and mutate through the lock exposed here.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Set

from orderlist.logic.errors import InvalidInput
from orderlist.logic.events import EventBuffer
from orderlist.logic.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

LABEL_PREFIX = "Item"


def label_for(item_id: int) -> str:
    """Return the deterministic label for an item id."""
    return f"{LABEL_PREFIX} {item_id}"


class CatalogStore:
    """Order (a permutation of ``1..size``) plus the selected-id set."""

    def __init__(self, size: int, events: Optional[EventBuffer] = None) -> None:
        if size < 0:
            raise InvalidInput("catalog size must be non-negative")
        self._size = int(size)
        self.lock = ReadWriteLock()
        self.order: List[int] = []
        self.selected: Set[int] = set()
        # Published mutation events; None disables buffering.
        self.events = events
        self.reset()

    @property
    def size(self) -> int:
        return self._size

    def reset(self) -> None:
        """Restore the initial ascending order and clear all selections."""
        with self.lock.write():
            self.order = list(range(1, self._size + 1))
            self.selected = set()
        logger.info("catalog_store.reset size=%s", self._size)

    def contains(self, item_id: int) -> bool:
        # Order is always a permutation of 1..size, so a range check is exact.
        return isinstance(item_id, int) and not isinstance(item_id, bool) and 1 <= item_id <= self._size

    def index_of(self, item_id: int) -> int:
        """Position of ``item_id`` in Order, or -1. Caller must hold the lock."""
        if not self.contains(item_id):
            return -1
        try:
            return self.order.index(item_id)
        except ValueError:
            return -1

    def snapshot_order(self) -> List[int]:
        with self.lock.read():
            return list(self.order)


__all__ = ["CatalogStore", "label_for", "LABEL_PREFIX"]
