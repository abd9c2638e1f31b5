"""HTTP contract tests for the list API.

Uses the in-process FastAPI TestClient against a 50-item catalog mounted
under the default ``/api`` prefix.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

import orderlist.routes.items as items_routes
from orderlist.http.problem import PROBLEM_MEDIA_TYPE


def _ids(resp) -> list[int]:
    return [item["id"] for item in resp.json()["items"]]


def test_get_items_defaults_to_first_twenty(client):
    resp = client.get("/api/items")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 50
    assert _ids(resp) == list(range(1, 21))
    assert body["items"][0] == {"id": 1, "value": "Item 1", "selected": False}


def test_get_items_paginates_and_searches(client):
    resp = client.get("/api/items", params={"offset": 45, "limit": 10})
    assert _ids(resp) == [46, 47, 48, 49, 50]

    resp = client.get("/api/items", params={"q": "item 4", "limit": 5})
    assert _ids(resp) == [4, 40, 41, 42, 43]
    assert resp.json()["total"] == 11


def test_default_limit_is_configurable(app_factory):
    with TestClient(app_factory(50, default_limit=7)) as c:
        assert len(c.get("/api/items").json()["items"]) == 7


def test_non_positive_limit_is_bad_request(client):
    resp = client.get("/api/items", params={"limit": 0})
    assert resp.status_code == 400
    assert resp.headers["content-type"].startswith(PROBLEM_MEDIA_TYPE)
    assert resp.json()["code"] == "INVALID_INPUT"
    assert resp.json()["success"] is False


def test_select_roundtrip(client, app):
    resp = client.post("/api/select", json={"id": 3, "selected": True})
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert client.post("/api/select", json={"id": 3, "selected": True}).json() == {"success": True}
    assert app.state.catalog.selected == {3}
    assert client.get("/api/items", params={"limit": 3}).json()["items"][2]["selected"] is True


def test_select_unknown_id_is_bad_request(client, app):
    resp = client.post("/api/select", json={"id": 999, "selected": True})
    assert resp.status_code == 400
    assert resp.json()["code"] == "ITEM_NOT_FOUND"
    assert app.state.catalog.selected == set()


def test_order_forward_and_backward(client):
    assert client.post("/api/order", json={"id": 2, "afterId": 4}).json() == {"success": True}
    assert _ids(client.get("/api/items", params={"limit": 5})) == [1, 3, 4, 2, 5]

    client.post("/__test__/reset-state")
    client.post("/api/order", json={"id": 4, "afterId": 1})
    assert _ids(client.get("/api/items", params={"limit": 5})) == [1, 4, 2, 3, 5]


def test_order_null_after_moves_to_front(client):
    resp = client.post("/api/order", json={"id": 30, "afterId": None})
    assert resp.status_code == 200
    assert _ids(client.get("/api/items", params={"limit": 2})) == [30, 1]


def test_order_unknown_ids_leave_order_untouched(client, app):
    for body in ({"id": 77, "afterId": 1}, {"id": 1, "afterId": 77}):
        resp = client.post("/api/order", json=body)
        assert resp.status_code == 400
        assert resp.json()["code"] == "ITEM_NOT_FOUND"
    assert app.state.catalog.snapshot_order() == list(range(1, 51))


def test_malformed_bodies_are_rejected_before_mutation(client, app):
    assert client.post("/api/select", json={"id": "3", "selected": True}).status_code == 422
    assert client.post("/api/select", json={"id": 3}).status_code == 422
    resp = client.post("/api/order", json={"afterId": 2})
    assert resp.status_code == 422
    assert resp.json()["code"] == "INVALID_INPUT"
    assert app.state.catalog.snapshot_order() == list(range(1, 51))


def test_unexpected_failure_is_internal_error(app, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("boom")

    monkeypatch.setattr(items_routes, "move_after", boom)
    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.post("/api/order", json={"id": 1, "afterId": 2})
    assert resp.status_code == 500
    assert resp.json()["code"] == "INTERNAL_ERROR"


def test_request_id_is_assigned_and_echoed(client):
    assert client.get("/health").headers.get("x-request-id")
    resp = client.get("/health", headers={"X-Request-Id": "abc-123"})
    assert resp.headers["x-request-id"] == "abc-123"


def test_health_reports_catalog_size(client):
    assert client.get("/health").json() == {"status": "ok", "items": 50}


def test_test_support_events_and_reset(client):
    client.post("/api/order", json={"id": 5, "afterId": None})
    client.post("/api/select", json={"id": 5, "selected": True})
    events = client.get("/__test__/events").json()
    assert [e["type"] for e in events] == ["item.moved", "item.selection_changed"]

    assert client.post("/__test__/reset-state").status_code == 204
    assert client.get("/__test__/events").json() == []
    assert _ids(client.get("/api/items", params={"limit": 1})) == [1]


def test_test_support_is_not_mounted_by_default(app_factory):
    with TestClient(app_factory(5, enable_test_support=False)) as c:
        assert c.post("/__test__/reset-state").status_code == 404


def test_custom_prefix(app_factory):
    with TestClient(app_factory(5, prefix="/v2")) as c:
        assert c.get("/v2/items").json()["total"] == 5
        assert c.get("/api/items").status_code == 404


def test_events_are_not_buffered_without_test_support(app_factory):
    app = app_factory(20, enable_test_support=False)
    with TestClient(app) as c:
        for n in range(1, 21):
            c.post("/api/select", json={"id": n, "selected": True})
            c.post("/api/order", json={"id": n, "afterId": None})
    assert app.state.catalog.events is None


def test_event_buffers_are_per_app(app_factory):
    first, second = app_factory(10), app_factory(10)
    with TestClient(first) as a, TestClient(second) as b:
        a.post("/api/select", json={"id": 1, "selected": True})
        assert len(a.get("/__test__/events").json()) == 1
        assert b.get("/__test__/events").json() == []
