"""Client session: paging, debounced search and optimistic edits.

``ListSession`` ties the client components together the way a list screen
uses them: an initial page, infinite-scroll page loads, a search box whose
input is debounced, and drag/selection edits routed through the optimistic
coordinator. Leaving search mode triggers main-view reconciliation.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import httpx

from orderlist.client.api import ListApiClient
from orderlist.client.coordinator import AlertFn, OptimisticMutationCoordinator
from orderlist.client.debounce import Debouncer
from orderlist.client.errors import ClientError
from orderlist.client.reconciler import ViewReconciler
from orderlist.client.state import ListState
from orderlist.client.text import TEXT
from orderlist.config import ClientConfig
from orderlist.models.items import ListItem

logger = logging.getLogger(__name__)


class ListSession:
    def __init__(
        self,
        api: ListApiClient,
        *,
        batch_size: int = 20,
        debounce_seconds: float = 0.4,
        alert: Optional[AlertFn] = None,
    ) -> None:
        self.api = api
        self.batch_size = batch_size
        self.state = ListState()
        self.coordinator = OptimisticMutationCoordinator(self.state, api, alert=alert)
        self.reconciler = ViewReconciler(self.state, api, batch_size, send_lock=self.coordinator.send_lock)
        self._search = Debouncer(debounce_seconds, self._run_search)
        # Request-generation token for search fetches
        self._search_token = 0

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        alert: Optional[AlertFn] = None,
    ) -> "ListSession":
        api = ListApiClient(config.base_url, timeout=config.request_timeout, transport=transport)
        return cls(
            api,
            batch_size=config.batch_size,
            debounce_seconds=config.search_debounce_ms / 1000.0,
            alert=alert,
        )

    async def __aenter__(self) -> "ListSession":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        self._search.cancel()
        await self.api.aclose()

    # -----------------------------
    # Paging
    # -----------------------------

    async def _fetch(self, offset: int, term: Optional[str] = None) -> List[ListItem]:
        self.state.inflight += 1
        try:
            page = await self.api.get_items(offset, self.batch_size, term)
        finally:
            self.state.inflight -= 1
        return page.items

    async def load_initial(self) -> bool:
        try:
            items = await self._fetch(0)
        except ClientError as e:
            logger.error("%s %s", TEXT["error_load_items"], e.message)
            return False
        ids = self.state.merge_page(items)
        self.state.main.replace(ids, has_more=len(ids) == self.batch_size)
        return True

    async def load_more(self) -> bool:
        """Append the next page of the active projection.

        No-op while another load is in flight or when the projection has no
        further pages. Pages that arrive for a replaced projection are dropped.
        """
        state = self.state
        proj = state.active
        if state.loading or not proj.has_more:
            return False
        generation = proj.generation
        searching = state.is_searching
        term = state.search_term if searching else None
        try:
            items = await self._fetch(len(proj.ids), term)
        except ClientError as e:
            logger.error("%s %s", TEXT["error_load_more"], e.message)
            return False
        if proj.generation != generation or (searching and state.search_term != term):
            logger.info("load_more_discarded reason=view_replaced")
            return False
        ids = state.merge_page(items)
        proj.extend(ids, has_more=len(items) == self.batch_size)
        return True

    # -----------------------------
    # Search
    # -----------------------------

    async def set_search_term(self, term: str) -> None:
        """Apply search input immediately; fetch results after the quiet window.

        Clearing the term drops the search projection and reconciles the main
        projection if a reorder happened while searching.
        """
        self.state.search_term = term
        self._search_token += 1
        if term:
            self._search.trigger(term)
            return
        self._search.cancel()
        self.state.search.replace([], has_more=True)
        try:
            await self.reconciler.reconcile()
        except ClientError as e:
            logger.error("%s %s", TEXT["error_load_items"], e.message)

    async def wait_for_search(self) -> None:
        """Wait until the pending debounced search (if any) has completed."""
        await self._search.wait()

    async def _run_search(self, term: str) -> None:
        token = self._search_token
        try:
            items = await self._fetch(0, term)
        except ClientError as e:
            logger.error("%s %s", TEXT["error_load_items"], e.message)
            if token == self._search_token:
                self.state.search.replace([], has_more=False)
            return
        if token != self._search_token:
            logger.info("search_result_discarded term=%r", term)
            return
        ids = self.state.merge_page(items)
        self.state.search.replace(ids, has_more=len(ids) == self.batch_size)

    # -----------------------------
    # Edits
    # -----------------------------

    async def toggle_selection(self, item_id: int) -> bool:
        return await self.coordinator.toggle_selection(item_id)

    async def move_after(self, item_id: int, after_id: Optional[int]) -> bool:
        return await self.coordinator.move_after(item_id, after_id)

    async def drag(self, active_id: int, over_id: Optional[int]) -> bool:
        return await self.coordinator.drag(active_id, over_id)

    # -----------------------------
    # Rendering helpers
    # -----------------------------

    def visible_items(self) -> List[ListItem]:
        return [self.state.snapshot(i) for i in self.state.active.ids if i in self.state.items]

    @property
    def is_draggable(self) -> bool:
        return not self.state.is_searching or len(self.state.search.ids) > 1

    @property
    def has_more(self) -> bool:
        return self.state.active.has_more


__all__ = ["ListSession"]
