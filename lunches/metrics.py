"""Run counters for the order synchronizer.

Pipeline stages report through ``increment``; the CLI installs
``LoggingMetrics`` to total them for the run summary, everything else runs
against the no-op sink.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol

ORDERS_CREATED = "orders.created"
ORDERS_EXISTING = "orders.existing"
ORDERS_FAILED = "orders.failed"
ORDERS_SKIPPED_CELL = "orders.skipped_cell"
ORDERS_SKIPPED_USER = "orders.skipped_user"
WEEKS_SYNCED = "weeks.synced"
WEEKS_FAILED = "weeks.failed"

COUNTERS = (
    ORDERS_CREATED,
    ORDERS_EXISTING,
    ORDERS_FAILED,
    ORDERS_SKIPPED_CELL,
    ORDERS_SKIPPED_USER,
    WEEKS_SYNCED,
    WEEKS_FAILED,
)


class Metrics(Protocol):
    def increment(self, name: str, tags: Mapping[str, str] | None = None) -> None: ...  # pragma: no cover


class _DiscardingMetrics:
    def increment(self, name: str, tags: Mapping[str, str] | None = None) -> None:
        return None


_sink: Metrics = _DiscardingMetrics()


def set_metrics(sink: Metrics) -> None:
    global _sink
    _sink = sink


def reset_metrics() -> None:
    set_metrics(_DiscardingMetrics())


def increment(name: str, tags: Mapping[str, str] | None = None) -> None:
    if name not in COUNTERS:
        raise ValueError(f"Unknown counter {name!r}")
    _sink.increment(name, tags)


__all__ = [
    "Metrics",
    "COUNTERS",
    "ORDERS_CREATED",
    "ORDERS_EXISTING",
    "ORDERS_FAILED",
    "ORDERS_SKIPPED_CELL",
    "ORDERS_SKIPPED_USER",
    "WEEKS_SYNCED",
    "WEEKS_FAILED",
    "set_metrics",
    "reset_metrics",
    "increment",
]
