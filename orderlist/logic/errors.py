"""Domain error taxonomy for the ordered list service.

Route handlers never build error payloads themselves; they let these
exceptions propagate and `orderlist.http.problem` renders them using the
mapping in `orderlist.http.error_mapping`.
"""

from __future__ import annotations


class OrderListError(Exception):
    """Base class for errors raised by the catalog logic layer."""

    code = "ORDERLIST_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ItemNotFound(OrderListError):
    """Raised when an id (or afterId) is not part of the Order."""

    code = "ITEM_NOT_FOUND"

    def __init__(self, item_id: object) -> None:
        super().__init__(f"item {item_id!r} not found")
        self.item_id = item_id


class InvalidInput(OrderListError):
    """Raised for out-of-range pagination or malformed arguments."""

    code = "INVALID_INPUT"


__all__ = ["OrderListError", "ItemNotFound", "InvalidInput"]
