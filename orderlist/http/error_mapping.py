"""Central error mapping for domain exceptions.

Single source of truth for mapping logic-layer errors to problem+json codes
and HTTP statuses. Exception handlers import from here instead of hardcoding
strings or numbers.
"""

from __future__ import annotations

from typing import Dict, Type

from orderlist.logic.errors import InvalidInput, ItemNotFound, OrderListError

DOMAIN_ERROR_MAP: Dict[Type[OrderListError], Dict[str, object]] = {
    ItemNotFound: {"code": "ITEM_NOT_FOUND", "status": 400, "title": "Item Not Found"},
    InvalidInput: {"code": "INVALID_INPUT", "status": 400, "title": "Invalid Request"},
}

UNEXPECTED = {"code": "INTERNAL_ERROR", "status": 500, "title": "Internal Server Error"}


def lookup(exc: OrderListError) -> Dict[str, object]:
    """Return the mapping entry for ``exc``, walking its class hierarchy."""
    for cls in type(exc).__mro__:
        entry = DOMAIN_ERROR_MAP.get(cls)  # type: ignore[arg-type]
        if entry is not None:
            return entry
    return UNEXPECTED


__all__ = ["DOMAIN_ERROR_MAP", "UNEXPECTED", "lookup"]
