from __future__ import annotations

import pytest

from lunches import metrics
from lunches.metrics_logging import LoggingMetrics


def test_increments_reach_installed_sink():
    counters = LoggingMetrics()
    metrics.set_metrics(counters)
    metrics.increment(metrics.WEEKS_SYNCED)
    metrics.increment(metrics.ORDERS_SKIPPED_CELL, {"reason": "invalid_variant"})
    assert counters.totals == {"weeks.synced": 1, "orders.skipped_cell": 1}


def test_unknown_counter_is_rejected():
    counters = LoggingMetrics()
    metrics.set_metrics(counters)
    with pytest.raises(ValueError):
        metrics.increment("orders.lost")
    assert counters.totals == {}


def test_reset_discards_increments():
    counters = LoggingMetrics()
    metrics.set_metrics(counters)
    metrics.reset_metrics()
    metrics.increment(metrics.ORDERS_CREATED)
    assert counters.totals == {}
