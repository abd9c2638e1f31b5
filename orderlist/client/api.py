"""Async HTTP client for the list API.

Thin wrapper over ``httpx.AsyncClient`` that parses responses into the shared
wire models and converts failures into the client error taxonomy.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from orderlist.client.errors import RequestRejected, TransportFailure
from orderlist.client.text import TEXT
from orderlist.models.items import ItemsPage, MutationResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ListApiClient:
    """Calls ``GET /items``, ``POST /select`` and ``POST /order``.

    ``base_url`` includes the API prefix, e.g. ``http://127.0.0.1:3001/api``.
    A ``transport`` may be injected (``httpx.ASGITransport`` for an in-process
    app, ``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ListApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        try:
            response = await self._client.request(method, url, params=params, json=json)
        except httpx.TransportError as e:
            message = str(e) or TEXT["api_request_unknown_error"]
            logger.error("%s method=%s url=%s message=%s", TEXT["api_request_error"], method, url, message)
            raise TransportFailure(message) from e

        if response.is_error:
            try:
                data = response.json()
            except ValueError:
                data = response.text
            detail = data.get("detail") if isinstance(data, dict) else None
            message = str(detail or f"HTTP {response.status_code}")
            logger.error(
                "%s method=%s url=%s status=%s message=%s",
                TEXT["api_request_error"],
                method,
                url,
                response.status_code,
                message,
            )
            raise RequestRejected(message, status=response.status_code, data=data)

        try:
            return response.json()
        except ValueError as e:
            raise RequestRejected("response body is not valid JSON", status=response.status_code) from e

    async def get_items(self, offset: int, limit: int, term: Optional[str] = None) -> ItemsPage:
        params: Dict[str, Any] = {"offset": offset, "limit": limit}
        if term:
            params["q"] = term
        data = await self._request("GET", "/items", params=params)
        try:
            return ItemsPage.model_validate(data)
        except PydanticValidationError as e:
            raise RequestRejected("malformed items page", data=data) from e

    async def _mutate(self, url: str, body: Dict[str, Any]) -> bool:
        data = await self._request("POST", url, json=body)
        try:
            result = MutationResult.model_validate(data)
        except PydanticValidationError as e:
            raise RequestRejected("malformed mutation result", data=data) from e
        if not result.success:
            raise RequestRejected("server reported failure", data=data)
        return True

    async def post_select(self, item_id: int, selected: bool) -> bool:
        return await self._mutate("/select", {"id": item_id, "selected": selected})

    async def post_order(self, item_id: int, after_id: Optional[int]) -> bool:
        return await self._mutate("/order", {"id": item_id, "afterId": after_id})


__all__ = ["ListApiClient", "DEFAULT_TIMEOUT"]
