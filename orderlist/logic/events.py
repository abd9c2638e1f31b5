"""Domain event constants and publisher.

Defines event type constants and a simple publish() callable used by the
selection and reorder flows. Events are always logged; they are buffered only
when the caller passes an ``EventBuffer`` (the catalog carries one while the
test-support routes are mounted).
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Any, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)

ITEM_SELECTION_CHANGED = "item.selection_changed"
ITEM_MOVED = "item.moved"

DEFAULT_BUFFER_SIZE = 1000


class EventBuffer:
    """Bounded in-memory event buffer; the oldest events drop off first."""

    def __init__(self, maxlen: int = DEFAULT_BUFFER_SIZE) -> None:
        self._events: Deque[Dict[str, Any]] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def append(self, event: Dict[str, Any]) -> None:
        with self._lock:
            self._events.append(event)

    def drain(self, clear: bool = True) -> List[Dict[str, Any]]:
        """Return buffered events; optionally clear the buffer."""
        with self._lock:
            events = list(self._events)
            if clear:
                self._events.clear()
        return events


def publish(event_type: str, payload: Dict[str, Any], buffer: Optional[EventBuffer] = None) -> None:
    """Publish a domain event.

    Events are logged for observability and, when ``buffer`` is given,
    recorded for test observation.
    """
    logger.info("event_publish type=%s payload=%s", event_type, payload)
    if buffer is not None:
        buffer.append({"type": event_type, "payload": payload})


__all__ = [
    "ITEM_SELECTION_CHANGED",
    "ITEM_MOVED",
    "DEFAULT_BUFFER_SIZE",
    "EventBuffer",
    "publish",
]
