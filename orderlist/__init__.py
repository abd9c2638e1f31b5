"""FastAPI application package for the ordered list service.

Exposes the application factory. Catalog logic lives in `orderlist/logic/`,
route handlers in `orderlist/routes/`, and the optimistic client in
`orderlist/client/`.
"""

from __future__ import annotations

from orderlist.main import create_app

__all__ = ["create_app"]
