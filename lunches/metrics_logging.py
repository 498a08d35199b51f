from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Mapping

from .metrics import Metrics

logger = logging.getLogger("lunches.metrics")


class LoggingMetrics(Metrics):
    """Logs every increment and keeps running totals for the run summary."""

    def __init__(self) -> None:
        self.totals: Counter[str] = Counter()

    def increment(self, name: str, tags: Mapping[str, str] | None = None) -> None:
        ordered = dict(sorted((tags or {}).items()))
        self.totals[name] += 1
        logger.debug("metric name=%s tags=%s", name, ordered)
