"""Client-side error taxonomy.

Every failed call surfaces as a ClientError so the optimistic coordinator can
roll back with a single ``except`` clause.
"""

from __future__ import annotations

from typing import Any, Optional


class ClientError(Exception):
    """Base class for list API client failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class TransportFailure(ClientError):
    """Network failure, timeout, or server unreachable."""


class RequestRejected(ClientError):
    """The server answered with a non-2xx status (or ``success: false``)."""

    def __init__(self, message: str, status: Optional[int] = None, data: Any = None) -> None:
        super().__init__(message)
        self.status = status
        self.data = data


__all__ = ["ClientError", "TransportFailure", "RequestRejected"]
