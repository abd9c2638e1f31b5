"""Move-after reordering for the global Order and for client-side views.

``relocate_after`` is the single positioning primitive: it places an id
directly behind another id (or at the front when no predecessor is given).
The server applies it to the catalog under the write lock; the client applies
it to whichever local projection is on screen, so both sides agree on the
resulting arrangement.

The splice inserts the moved id first and removes the stale occurrence
second. The removal index depends on the direction of travel:

- forward (towards the end): the old entry sits before the insertion
  point and keeps its index;
- backward (towards the front): the insertion shifted the old entry one
  slot to the right.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from orderlist.logic.catalog_store import CatalogStore
from orderlist.logic.errors import ItemNotFound
from orderlist.logic.events import ITEM_MOVED, publish

logger = logging.getLogger(__name__)


def _index(seq: List[int], item_id: int) -> int:
    try:
        return seq.index(item_id)
    except ValueError:
        raise ItemNotFound(item_id) from None


def insertion_point(seq: List[int], after_id: Optional[int]) -> int:
    """Return the pre-splice index at which the moved id is inserted."""
    if after_id is None:
        return 0
    # Insertion happens before removal, so after_id has not shifted yet in
    # either direction and the slot behind it is the target.
    return _index(seq, after_id) + 1


def relocate_after(seq: List[int], item_id: int, after_id: Optional[int]) -> bool:
    """Move ``item_id`` so it directly follows ``after_id`` in ``seq``.

    Returns True when ``seq`` changed, False when it was already in place.
    Raises ItemNotFound, leaving ``seq`` untouched, if either id is absent.
    """
    current = _index(seq, item_id)
    if after_id == item_id:
        return False
    target = insertion_point(seq, after_id)
    if target == current:
        return False
    seq.insert(target, item_id)
    remove_at = current if current < target else current + 1
    del seq[remove_at]
    return True


def move_after(store: CatalogStore, item_id: int, after_id: Optional[int]) -> bool:
    """Relocate ``item_id`` behind ``after_id`` in the global Order.

    Both ids are validated before the splice so a failed lookup never leaves
    the Order partially updated. Returns True on success (including no-op).
    """
    if not store.contains(item_id):
        raise ItemNotFound(item_id)
    if after_id is not None and not store.contains(after_id):
        raise ItemNotFound(after_id)
    with store.lock.write():
        changed = relocate_after(store.order, item_id, after_id)
    if changed:
        publish(ITEM_MOVED, {"id": item_id, "after_id": after_id}, store.events)
    else:
        logger.info("move_after.noop id=%s after_id=%s", item_id, after_id)
    return True


__all__ = ["relocate_after", "insertion_point", "move_after"]
