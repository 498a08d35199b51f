from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from . import metrics
from .collaborators import OrderStore
from .errors import RemoteSyncError
from .records import OrderRecord

log = logging.getLogger(__name__)


@dataclass
class SyncStats:
    created: int = 0
    existing: int = 0
    failed: int = 0
    would_create: int = 0

    @property
    def total(self) -> int:
        return self.created + self.existing + self.failed + self.would_create


class SyncEngine:
    """Create-if-absent synchronisation keyed by (user id, shipment date).

    The existence check and the create are two separate store calls, so two
    concurrent runs can still both create the same order. Within one pass the
    engine remembers the keys it created and never creates a key twice.
    """

    def __init__(self, store: OrderStore, *, dry_run: bool = False):
        self.store = store
        self.dry_run = dry_run

    def sync(self, records: Iterable[OrderRecord]) -> SyncStats:
        stats = SyncStats()
        created_keys: set[tuple] = set()
        for record in records:
            if record.key in created_keys:
                stats.existing += 1
                log.info("Order on %s of user %s already created in this run", record.date_iso(), record.user.fullname)
                continue
            try:
                existing = self.store.find_one(record)
                if existing:
                    stats.existing += 1
                    metrics.increment(metrics.ORDERS_EXISTING)
                    continue
                if self.dry_run:
                    stats.would_create += 1
                    created_keys.add(record.key)
                    log.info("[DRY-RUN] order on %s of user %s would be created", record.date_iso(), record.user.fullname)
                    continue
                self.store.create(record)
            except RemoteSyncError as e:
                stats.failed += 1
                metrics.increment(metrics.ORDERS_FAILED)
                log.warning(
                    "Can't sync user %s order on %s due to: %s",
                    record.user.fullname, record.date_iso(), e,
                )
                continue
            created_keys.add(record.key)
            stats.created += 1
            metrics.increment(metrics.ORDERS_CREATED)
            log.info("Order on %s of user %s is created", record.date_iso(), record.user.fullname)
        return stats


__all__ = ["SyncEngine", "SyncStats"]
