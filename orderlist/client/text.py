"""User-facing messages shared by the client components."""

from __future__ import annotations

TEXT = {
    "error_load_items": "Error loading items:",
    "error_load_more": "Load more error:",
    "error_order": "Error when updating the sequence on the server:",
    "error_select": "Error updating selection on the server:",
    "alert_order": "The movement could not be saved. Try again.",
    "alert_select": "The selection could not be saved. Try again.",
    "api_request_error": "API request error:",
    "api_request_unknown_error": "Unknown error occurred during API request",
}

__all__ = ["TEXT"]
