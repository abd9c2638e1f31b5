"""APIRouter registration for the ordered list service."""

from __future__ import annotations

from fastapi import APIRouter

from orderlist.routes.items import router as items_router

api_router = APIRouter()
api_router.include_router(items_router, tags=["Items"])

__all__ = ["api_router"]
