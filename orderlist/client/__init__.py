"""Async client for the list API with optimistic edits and view reconciliation."""

from __future__ import annotations

from orderlist.client.api import ListApiClient
from orderlist.client.coordinator import OptimisticMutationCoordinator
from orderlist.client.errors import ClientError, RequestRejected, TransportFailure
from orderlist.client.reconciler import ViewReconciler
from orderlist.client.session import ListSession
from orderlist.client.state import ListState, Projection

__all__ = [
    "ListApiClient",
    "ListSession",
    "ListState",
    "Projection",
    "OptimisticMutationCoordinator",
    "ViewReconciler",
    "ClientError",
    "RequestRejected",
    "TransportFailure",
]
