from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from itertools import groupby

from . import metrics
from .collaborators import UserDirectory
from .errors import InvalidVariant, LunchesError, MenuNotFound, UserResolutionError
from .menu_variant_index import MenuVariantIndex
from .records import Address, OrderRecord, User
from .week_days import WeekDays
from .week_matrix_parser import ParsedCell

log = logging.getLogger(__name__)

DEFAULT_CITY = "Kiev"
DRY_RUN_USER_PREFIX = "dry-run:"


@dataclass
class ReconstructionStats:
    cells: int = 0
    records: int = 0
    skipped_cells: int = 0
    skipped_users: int = 0


class OrderReconstructor:
    """Turns parsed cells of one week into OrderRecords.

    User policy is find-or-create: an unknown name is created with the row's
    address context (in dry-run mode a placeholder user stands in and the
    directory is left untouched). Failure isolation:
    - any failure while building a user's week -> that week is skipped
    - unknown token or missing menu -> only that cell is skipped (warning)
    """

    def __init__(
        self,
        week: WeekDays,
        index: MenuVariantIndex,
        users: UserDirectory,
        *,
        city: str = DEFAULT_CITY,
        company: str | None = None,
        dry_run: bool = False,
    ):
        self.week = week
        self.index = index
        self.users = users
        self.city = city
        self.company = company
        self.dry_run = dry_run
        self.stats = ReconstructionStats()

    def reconstruct(self, cells: Iterable[ParsedCell]) -> Iterator[OrderRecord]:
        for _, row_cells in groupby(cells, key=lambda c: c.row_index):
            row = list(row_cells)
            head = row[0]
            self.stats.cells += len(row)
            try:
                user = self.resolve_user(head.user_name, head.address)
                records = self._user_week(user, row)
            except Exception as e:
                self.stats.skipped_users += 1
                metrics.increment(metrics.ORDERS_SKIPPED_USER, {"week": self.week.label})
                log.error("Can't create %s's week orders due to: %s", head.user_name, e)
                continue
            log.info("User %s made %d orders this week", head.user_name, len(records))
            self.stats.records += len(records)
            yield from records

    def resolve_user(self, name: str, address: str | None) -> User:
        try:
            user = self.users.find_one(name)
            if user is None and self.dry_run:
                log.info("[DRY-RUN] user %s would be created with address %s", name, address)
                return User(id=f"{DRY_RUN_USER_PREFIX}{name}", fullname=name, address=address)
            if user is None:
                log.info("User %s not found; creating with address %s", name, address)
                user = self.users.create(name, address)
        except UserResolutionError:
            raise
        except LunchesError as e:
            raise UserResolutionError(f"User {name} could not be resolved: {e}") from e
        if user is None:
            raise UserResolutionError(f"User {name} not found")
        if not user.address:
            user = user.with_address(address)
        return user

    def _user_week(self, user: User, cells: list[ParsedCell]) -> list[OrderRecord]:
        address = Address(city=self.city, street=user.address, company=user.company or self.company)
        records: list[OrderRecord] = []
        for cell in cells:
            day = self.week.at(cell.weekday)
            try:
                items = self.index.items(day, cell.token)
            except (InvalidVariant, MenuNotFound) as e:
                self.stats.skipped_cells += 1
                metrics.increment(metrics.ORDERS_SKIPPED_CELL, {"reason": e.code})
                log.warning(
                    "%s's order on %s has not been created due to: %s",
                    user.fullname, day.isoformat(), e,
                )
                continue
            records.append(OrderRecord(shipment_date=day, user=user, address=address, items=items))
        return records


__all__ = ["DEFAULT_CITY", "DRY_RUN_USER_PREFIX", "OrderReconstructor", "ReconstructionStats"]
