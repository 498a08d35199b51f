from __future__ import annotations

from collections.abc import Iterator, Sequence
from datetime import date
from typing import Any, Protocol

from .errors import LunchesError
from .menu import Menu
from .records import OrderRecord, User

# (week label, rows of cells); a sheet that could not be read carries the
# error in place of its rows
WeekSheet = tuple[str, Sequence[Sequence[Any]] | LunchesError]


class SpreadsheetReader(Protocol):
    def list_weeks(self, sheet_id: Any, sheet_range: str) -> Iterator[WeekSheet]: ...


class MenuService(Protocol):
    def find_between(self, start: date, end: date) -> list[Menu]: ...


class UserDirectory(Protocol):
    """Users are looked up by display name."""

    def find_one(self, name: str) -> User | None: ...
    def create(self, name: str, address: str | None) -> User: ...


class OrderStore(Protocol):
    """Remote orders keyed by (user id, shipment date)."""

    def find_one(self, record: OrderRecord) -> Any | None: ...
    def create(self, record: OrderRecord) -> Any: ...


__all__ = ["WeekSheet", "SpreadsheetReader", "MenuService", "UserDirectory", "OrderStore"]
