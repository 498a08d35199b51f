from __future__ import annotations

from datetime import date

from conftest import FakeOrders
from lunches import metrics
from lunches.errors import RemoteSyncError
from lunches.metrics_logging import LoggingMetrics
from lunches.records import Address, OrderItem, OrderRecord, User
from lunches.sync_engine import SyncEngine


def _record(name="Ivan", day=3, uid=None):
    user = User(uid or f"id-{name}", name, "Room 1")
    return OrderRecord(date(2016, 10, day), user, Address("Kiev", "Room 1"), (OrderItem(1, "big"),))


def test_creates_missing_and_skips_existing():
    store = FakeOrders()
    store.orders[_record(day=3).key] = {"id": 1}
    stats = SyncEngine(store).sync([_record(day=3), _record(day=4)])
    assert (stats.created, stats.existing, stats.failed) == (1, 1, 0)
    assert set(store.orders) == {_record(day=3).key, _record(day=4).key}


def test_second_pass_creates_nothing():
    store = FakeOrders()
    records = [_record(day=d) for d in (3, 4, 5)]
    SyncEngine(store).sync(records)
    snapshot = dict(store.orders)
    stats = SyncEngine(store).sync(records)
    assert stats.created == 0 and stats.existing == 3
    assert store.orders == snapshot
    assert store.create_calls == 3


def test_store_failure_skips_one_record(caplog):
    store = FakeOrders(fail_for={"Broken"})
    stats = SyncEngine(store).sync([_record("Broken"), _record("Ivan")])
    assert (stats.created, stats.failed) == (1, 1)
    assert "Can't sync user Broken order on 2016-10-03" in caplog.text


def test_create_failure_is_isolated():
    class FlakyCreate(FakeOrders):
        def create(self, record):
            if record.shipment_date.day == 3:
                raise RemoteSyncError("500 Server Error")
            return super().create(record)

    store = FlakyCreate()
    stats = SyncEngine(store).sync([_record(day=3), _record(day=4)])
    assert (stats.created, stats.failed) == (1, 1)


def test_duplicate_key_in_one_batch_is_created_once():
    class LaggingStore(FakeOrders):
        def find_one(self, record):
            return None  # existence check never sees fresh writes

    store = LaggingStore()
    stats = SyncEngine(store).sync([_record(day=3), _record(day=3)])
    assert store.create_calls == 1
    assert (stats.created, stats.existing) == (1, 1)


def test_dry_run_never_creates():
    store = FakeOrders()
    stats = SyncEngine(store, dry_run=True).sync([_record(day=3), _record(day=4)])
    assert stats.would_create == 2
    assert store.create_calls == 0


def test_metrics_are_counted():
    counters = LoggingMetrics()
    metrics.set_metrics(counters)
    store = FakeOrders(fail_for={"Broken"})
    store.orders[_record(day=4).key] = {"id": 1}
    SyncEngine(store).sync([_record(day=3), _record(day=4), _record("Broken")])
    assert counters.totals == {"orders.created": 1, "orders.existing": 1, "orders.failed": 1}
