"""Functional tests for selection updates and the catalog lock."""

from __future__ import annotations

import threading

import pytest

from orderlist.logic.catalog_store import CatalogStore
from orderlist.logic.events import EventBuffer
from orderlist.logic.errors import ItemNotFound
from orderlist.logic.rwlock import ReadWriteLock
from orderlist.logic.selection import set_selected


def test_set_selected_is_idempotent(store: CatalogStore):
    assert set_selected(store, 2, True) is True
    assert set_selected(store, 2, True) is True
    assert store.selected == {2}
    published = store.events.drain()
    assert [e["payload"] for e in published] == [{"id": 2, "selected": True}]


def test_deselect_unselected_item_succeeds(store: CatalogStore):
    assert set_selected(store, 4, False) is True
    assert store.selected == set()
    assert store.events.drain() == []


@pytest.mark.parametrize("bad_id", [0, 6, -1, 10_000])
def test_unknown_id_is_rejected(store: CatalogStore, bad_id):
    with pytest.raises(ItemNotFound):
        set_selected(store, bad_id, True)
    assert store.selected == set()


def test_reset_restores_initial_state(store: CatalogStore):
    set_selected(store, 1, True)
    store.order.reverse()
    store.reset()
    assert store.snapshot_order() == [1, 2, 3, 4, 5]
    assert store.selected == set()


def test_writer_waits_for_readers():
    lock = ReadWriteLock()
    acquired = threading.Event()

    def writer():
        with lock.write():
            acquired.set()

    lock.acquire_read()
    t = threading.Thread(target=writer)
    t.start()
    assert not acquired.wait(0.1)
    lock.release_read()
    assert acquired.wait(2.0)
    t.join(2.0)


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = threading.Barrier(2, timeout=2.0)

    def reader():
        with lock.read():
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(3.0)
    assert not inside.broken


def test_store_without_buffer_records_nothing():
    plain = CatalogStore(5)
    for _ in range(3):
        set_selected(plain, 1, True)
        set_selected(plain, 1, False)
    assert plain.events is None


def test_event_buffer_drops_oldest_when_full():
    bounded = CatalogStore(5, events=EventBuffer(maxlen=3))
    for item_id in range(1, 6):
        set_selected(bounded, item_id, True)
    assert len(bounded.events) == 3
    assert [e["payload"]["id"] for e in bounded.events.drain()] == [3, 4, 5]
    assert len(bounded.events) == 0
