"""Problem+JSON utilities and global exception handlers.

Defines the RFC7807 media type and handler callables that produce
application/problem+json responses. Every error body also carries
``"success": false`` so clients of the mutation endpoints can branch on a
single field.
"""

from __future__ import annotations

from typing import Any, Dict
import logging
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse

from orderlist.http.error_mapping import UNEXPECTED, lookup
from orderlist.logic.errors import OrderListError

PROBLEM_MEDIA_TYPE = "application/problem+json"

logger = logging.getLogger(__name__)


def _problem(status: int, title: str, detail: str, code: str, **extra: Any) -> JSONResponse:
    body: Dict[str, Any] = {
        "title": title,
        "status": status,
        "detail": detail,
        "code": code,
        "success": False,
    }
    body.update(extra)
    return JSONResponse(body, status_code=status, media_type=PROBLEM_MEDIA_TYPE)


async def handle_domain_error(request: Request, exc: OrderListError) -> JSONResponse:  # noqa: D401
    entry = lookup(exc)
    status = int(entry["status"])  # type: ignore[arg-type]
    logger.info(
        "domain_error method=%s path=%s code=%s detail=%s",
        request.method,
        request.url.path,
        entry["code"],
        exc.message,
    )
    return _problem(status, str(entry["title"]), exc.message, str(entry["code"]))


async def handle_http_exception(request: Request, exc: HTTPException) -> JSONResponse:  # noqa: D401
    status = int(exc.status_code or 500)
    if isinstance(exc.detail, dict):
        body = {"status": status, "success": False, **exc.detail}
        return JSONResponse(body, status_code=status, media_type=PROBLEM_MEDIA_TYPE, headers=exc.headers)
    response = _problem(status, "Error", str(exc.detail or ""), f"HTTP_{status}")
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:  # noqa: D401
    errors = [
        {"loc": list(err.get("loc", ())), "msg": str(err.get("msg", "")), "type": str(err.get("type", ""))}
        for err in exc.errors()
    ]
    logger.info("request_validation_failed path=%s errors=%s", request.url.path, errors)
    return _problem(422, "Invalid Request", "Request validation failed", "INVALID_INPUT", errors=errors)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:  # noqa: D401
    logger.error("unexpected_error method=%s path=%s", request.method, request.url.path, exc_info=exc)
    return _problem(
        int(UNEXPECTED["status"]),  # type: ignore[arg-type]
        str(UNEXPECTED["title"]),
        "Unexpected failure",
        str(UNEXPECTED["code"]),
    )


__all__ = [
    "PROBLEM_MEDIA_TYPE",
    "handle_domain_error",
    "handle_http_exception",
    "handle_request_validation_error",
    "handle_unexpected_error",
]
