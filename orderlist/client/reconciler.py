"""Main-view reconciliation after reorders made in search mode.

A reorder issued from the search projection changes the server order in a
way the cached main projection cannot replay: the filtered neighbours say
nothing about unfiltered positions. The only repair is a full re-read of
the main projection, sized to what was already loaded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from orderlist.client.api import ListApiClient
from orderlist.client.state import ListState

logger = logging.getLogger(__name__)


class ViewReconciler:
    def __init__(
        self,
        state: ListState,
        api: ListApiClient,
        batch_size: int,
        send_lock: Optional[asyncio.Lock] = None,
    ) -> None:
        self.state = state
        self.api = api
        self.batch_size = batch_size
        # Shared with the mutation coordinator; see reconcile().
        self._send_lock = send_lock or asyncio.Lock()

    @property
    def is_stale(self) -> bool:
        return self.state.search_reordered

    def mark_stale(self) -> None:
        self.state.mark_search_reordered()

    async def reconcile(self) -> bool:
        """Refetch the main projection if search mode is off and it is stale.

        Mutations still on their way to the server are waited for first, so
        the fetch observes them and their rollbacks have already settled the
        flag. Returns True when the main projection was replaced. Client
        errors propagate and leave the stale flag set so a later call retries.
        """
        state = self.state
        if state.is_searching or not state.search_reordered:
            return False
        async with self._send_lock:
            if state.is_searching or not state.search_reordered:
                logger.info("reconcile_skipped reason=settled_while_waiting")
                return False
            seq = state.search_reorder_seq
            count = len(state.main.ids) or self.batch_size
            state.inflight += 1
            try:
                page = await self.api.get_items(0, count)
            finally:
                state.inflight -= 1
        ids = state.merge_page(page.items)
        state.main.replace(ids, has_more=len(ids) == count and len(ids) > 0)
        if state.search_reorder_seq == seq:
            state.search_reordered = False
        else:
            # Another search-mode reorder landed while we were fetching.
            logger.info("reconcile_raced seq_before=%s seq_after=%s", seq, state.search_reorder_seq)
        logger.info("main_view_reconciled count=%s has_more=%s", len(ids), state.main.has_more)
        return True


__all__ = ["ViewReconciler"]
