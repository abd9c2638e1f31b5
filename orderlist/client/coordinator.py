"""Optimistic mutation coordinator.

Applies a selection or position change to local state at once, then sends
the matching server mutation. When the server call fails the command's
inverse is applied and the user is alerted; failures are never swallowed
silently. Server calls are issued one at a time in the order the user made
them, while local updates are never delayed.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from orderlist.client.api import ListApiClient
from orderlist.client.commands import MoveItem, ToggleSelection
from orderlist.client.errors import ClientError
from orderlist.client.state import ListState
from orderlist.client.text import TEXT

logger = logging.getLogger(__name__)

AlertFn = Callable[[str], None]


def _log_alert(message: str) -> None:
    logger.warning("user_alert message=%s", message)


class OptimisticMutationCoordinator:
    def __init__(self, state: ListState, api: ListApiClient, alert: Optional[AlertFn] = None) -> None:
        self.state = state
        self.api = api
        self.alert = alert or _log_alert
        self._send_lock = asyncio.Lock()

    @property
    def send_lock(self) -> asyncio.Lock:
        """Held while a mutation is on its way to the server."""
        return self._send_lock

    async def toggle_selection(self, item_id: int) -> bool:
        command = ToggleSelection(item_id)
        selected = command.apply(self.state)
        try:
            async with self._send_lock:
                await self.api.post_select(item_id, selected)
        except ClientError as e:
            command.invert(self.state)
            logger.error("%s id=%s error=%s", TEXT["error_select"], item_id, e.message)
            self.alert(TEXT["alert_select"])
            return False
        return True

    async def move_after(self, item_id: int, after_id: Optional[int]) -> bool:
        """Place ``item_id`` behind ``after_id`` in the displayed projection and on the server."""
        displayed = self.state.active.ids
        if item_id not in displayed or (after_id is not None and after_id not in displayed):
            logger.warning("move_ignored id=%s after_id=%s reason=not_displayed", item_id, after_id)
            return False
        command = MoveItem(self.state.active_name, item_id, after_id)
        command.apply(self.state)
        try:
            async with self._send_lock:
                await self.api.post_order(item_id, after_id)
        except ClientError as e:
            command.invert(self.state)
            logger.error("%s id=%s after_id=%s error=%s", TEXT["error_order"], item_id, after_id, e.message)
            self.alert(TEXT["alert_order"])
            return False
        return True

    async def drag(self, active_id: int, over_id: Optional[int]) -> bool:
        """Finish a drag of ``active_id`` dropped onto ``over_id``'s slot.

        Like a sortable list, the dragged item takes the drop target's index;
        the id that ends up in front of it becomes the move-after anchor.
        Returns False when the drop changes nothing or either id is not displayed.
        """
        ids = list(self.state.active.ids)
        if over_id is None or active_id == over_id or active_id not in ids or over_id not in ids:
            return False
        old_index = ids.index(active_id)
        new_index = ids.index(over_id)
        ids.insert(new_index, ids.pop(old_index))
        after_id = ids[new_index - 1] if new_index > 0 else None
        return await self.move_after(active_id, after_id)


__all__ = ["OptimisticMutationCoordinator", "AlertFn"]
