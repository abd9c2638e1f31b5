"""Client-held list state.

Two independent projections (main and search) over one item cache. Neither
is authoritative: both are rebuilt from server pages and patched locally by
optimistic commands. ``search_reordered`` records that the server order has
changed underneath the cached main projection.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from orderlist.models.items import ListItem

MAIN = "main"
SEARCH = "search"


@dataclass
class Projection:
    ids: List[int] = field(default_factory=list)
    has_more: bool = True
    # Bumped whenever ``ids`` is replaced wholesale; commands and in-flight
    # page loads compare against it to detect a discarded view.
    generation: int = 0

    def replace(self, ids: Iterable[int], has_more: bool) -> None:
        self.ids = list(ids)
        self.has_more = has_more
        self.generation += 1

    def extend(self, ids: Iterable[int], has_more: bool) -> None:
        known = set(self.ids)
        self.ids.extend(i for i in ids if i not in known)
        self.has_more = has_more


@dataclass
class ListState:
    items: Dict[int, ListItem] = field(default_factory=dict)
    selected_ids: Set[int] = field(default_factory=set)
    main: Projection = field(default_factory=Projection)
    search: Projection = field(default_factory=Projection)
    search_term: str = ""
    search_reordered: bool = False
    # Incremented on every reorder issued from the search projection
    search_reorder_seq: int = 0
    inflight: int = 0

    @property
    def is_searching(self) -> bool:
        return bool(self.search_term)

    @property
    def loading(self) -> bool:
        return self.inflight > 0

    @property
    def active_name(self) -> str:
        return SEARCH if self.is_searching else MAIN

    def projection(self, name: str) -> Projection:
        if name == MAIN:
            return self.main
        if name == SEARCH:
            return self.search
        raise KeyError(name)

    @property
    def active(self) -> Projection:
        return self.projection(self.active_name)

    def mark_search_reordered(self) -> None:
        self.search_reordered = True
        self.search_reorder_seq += 1

    def merge_page(self, items: Iterable[ListItem]) -> List[int]:
        """Cache item snapshots, sync selection flags, return ids in page order."""
        ids: List[int] = []
        for item in items:
            self.items[item.id] = item
            if item.selected:
                self.selected_ids.add(item.id)
            else:
                self.selected_ids.discard(item.id)
            ids.append(item.id)
        return ids

    def snapshot(self, item_id: int) -> ListItem:
        item = self.items[item_id]
        return item.model_copy(update={"selected": item_id in self.selected_ids})


__all__ = ["MAIN", "SEARCH", "Projection", "ListState"]
