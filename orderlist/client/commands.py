"""Optimistic commands: local mutations that know how to undo themselves.

Each command captures, when applied, exactly the state it needs to produce
its inverse. Rollback applies the inverse instead of re-deriving the view.
"""

from __future__ import annotations

import logging
from typing import Optional

from orderlist.client.state import SEARCH, ListState
from orderlist.logic.errors import ItemNotFound
from orderlist.logic.reorder import relocate_after

logger = logging.getLogger(__name__)


class ToggleSelection:
    def __init__(self, item_id: int) -> None:
        self.item_id = item_id
        self.selected: Optional[bool] = None

    def apply(self, state: ListState) -> bool:
        """Flip the local flag; return the new value to send to the server."""
        self.selected = self.item_id not in state.selected_ids
        if self.selected:
            state.selected_ids.add(self.item_id)
        else:
            state.selected_ids.discard(self.item_id)
        return self.selected

    def invert(self, state: ListState) -> None:
        if self.selected:
            state.selected_ids.discard(self.item_id)
        else:
            state.selected_ids.add(self.item_id)


class MoveItem:
    """Relocate ``item_id`` behind ``after_id`` inside one projection."""

    def __init__(self, projection: str, item_id: int, after_id: Optional[int]) -> None:
        self.projection = projection
        self.item_id = item_id
        self.after_id = after_id
        self._generation: Optional[int] = None
        self._previous_after: Optional[int] = None
        self._previous_reordered = False
        self._reorder_seq: Optional[int] = None

    def apply(self, state: ListState) -> bool:
        proj = state.projection(self.projection)
        if self.item_id not in proj.ids:
            raise ItemNotFound(self.item_id)
        index = proj.ids.index(self.item_id)
        self._previous_after = proj.ids[index - 1] if index > 0 else None
        self._generation = proj.generation
        changed = relocate_after(proj.ids, self.item_id, self.after_id)
        if self.projection == SEARCH:
            # The cached main projection no longer mirrors the server order.
            self._previous_reordered = state.search_reordered
            state.mark_search_reordered()
            self._reorder_seq = state.search_reorder_seq
        return changed

    def invert(self, state: ListState) -> None:
        proj = state.projection(self.projection)
        # A later search-mode move owns the flag once the seq has moved on.
        if self.projection == SEARCH and state.search_reorder_seq == self._reorder_seq:
            state.search_reordered = self._previous_reordered
        if proj.generation != self._generation or self.item_id not in proj.ids:
            logger.info(
                "move_rollback_skipped projection=%s id=%s reason=view_replaced",
                self.projection,
                self.item_id,
            )
            return
        if self._previous_after is not None and self._previous_after not in proj.ids:
            return
        relocate_after(proj.ids, self.item_id, self._previous_after)


__all__ = ["ToggleSelection", "MoveItem"]
