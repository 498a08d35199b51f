from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Any

from . import metrics
from .collaborators import MenuService, OrderStore, SpreadsheetReader, UserDirectory
from .errors import LunchesError
from .menu_variant_index import MenuVariantIndex
from .order_reconstructor import DEFAULT_CITY, OrderReconstructor
from .sync_engine import SyncEngine
from .week_days import WeekDays, normalize_week_label
from .week_matrix_parser import WeekMatrixParser

log = logging.getLogger(__name__)

STATUS_SYNCED = "synced"
STATUS_FILTERED = "filtered"
STATUS_FAILED = "failed"


@dataclass
class WeekReport:
    label: str
    status: str
    records: int = 0
    created: int = 0
    existing: int = 0
    failed: int = 0
    would_create: int = 0
    skipped_cells: int = 0
    skipped_users: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class WeeklySynchronizer:
    """Runs the whole pipeline one week (one sheet) at a time.

    A failing week is logged and reported; the next week still runs.
    """

    def __init__(
        self,
        reader: SpreadsheetReader,
        menus: MenuService,
        users: UserDirectory,
        orders: OrderStore,
        *,
        company: str | None = None,
        city: str = DEFAULT_CITY,
        dry_run: bool = False,
    ):
        self.reader = reader
        self.menus = menus
        self.users = users
        self.orders = orders
        self.company = company
        self.city = city
        self.dry_run = dry_run
        self.parser = WeekMatrixParser()

    def sync(
        self,
        sheet_id: Any,
        sheet_range: str,
        *,
        menu_type: str | None = None,
        week_range: str | None = None,
    ) -> list[WeekReport]:
        reports: list[WeekReport] = []
        wanted_range = normalize_week_label(week_range)[0] if week_range else None
        for label, matrix in self.reader.list_weeks(sheet_id, sheet_range):
            date_range, label_type = normalize_week_label(label)
            if (menu_type and label_type != menu_type.lower()) or (wanted_range and date_range != wanted_range):
                log.debug("Week %s skipped by filters", label)
                reports.append(WeekReport(label=date_range, status=STATUS_FILTERED))
                continue
            log.info("Start sync %s week...", label)
            try:
                report = self.sync_week(label, matrix)
            except Exception as e:
                log.error("Can't sync week orders due to: %s", e)
                metrics.increment(metrics.WEEKS_FAILED)
                reports.append(WeekReport(label=date_range, status=STATUS_FAILED, error=str(e)))
                continue
            metrics.increment(metrics.WEEKS_SYNCED)
            reports.append(report)
        return reports

    def sync_week(self, label: str, matrix: Any) -> WeekReport:
        if isinstance(matrix, LunchesError):
            raise matrix
        week = WeekDays.parse(label)
        index = self.build_index(week)
        reconstructor = OrderReconstructor(
            week, index, self.users, city=self.city, company=self.company, dry_run=self.dry_run
        )
        records = reconstructor.reconstruct(self.parser.parse(matrix))
        stats = SyncEngine(self.orders, dry_run=self.dry_run).sync(records)
        rs = reconstructor.stats
        log.info(
            "Week %s: %d orders created, %d already present, %d failed",
            week.label, stats.created, stats.existing, stats.failed,
        )
        return WeekReport(
            label=week.label,
            status=STATUS_SYNCED,
            records=rs.records,
            created=stats.created,
            existing=stats.existing,
            failed=stats.failed,
            would_create=stats.would_create,
            skipped_cells=rs.skipped_cells,
            skipped_users=rs.skipped_users,
        )

    def build_index(self, week: WeekDays) -> MenuVariantIndex:
        menus = [
            m for m in self.menus.find_between(week.first(), week.last())
            if m.type == week.menu_type and (self.company is None or m.is_cooking_for(self.company))
        ]
        if not menus:
            log.warning("No %s menus found between %s and %s", week.menu_type, week.first(), week.last())
        return MenuVariantIndex(menus)


__all__ = ["WeeklySynchronizer", "WeekReport", "STATUS_SYNCED", "STATUS_FILTERED", "STATUS_FAILED"]
