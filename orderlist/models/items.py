"""Wire models for the list API.

Shared by the route handlers (request parsing, response shaping) and by the
async client (response parsing) so both sides agree on the JSON contract.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt


class ListItem(BaseModel):
    id: int
    value: str
    selected: bool = False


class ItemsPage(BaseModel):
    items: List[ListItem] = Field(default_factory=list)
    total: int = 0


class SelectRequest(BaseModel):
    id: StrictInt
    selected: StrictBool


class OrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: StrictInt
    # None moves the item to the front of the order
    after_id: Optional[StrictInt] = Field(default=None, alias="afterId")


class MutationResult(BaseModel):
    success: bool


__all__ = ["ListItem", "ItemsPage", "SelectRequest", "OrderRequest", "MutationResult"]
