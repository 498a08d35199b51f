from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .errors import ParseError
from .menu import MENU_TYPE_DIET, MENU_TYPE_REGULAR

__all__ = ["WeekDays", "normalize_week_label", "WEEKDAYS_COUNT"]

WEEKDAYS_COUNT = 5  # Monday..Friday

_DIET_SUFFIX_RE = re.compile(r"\s*-\s*diet\s*$", re.IGNORECASE)
_RANGE_RE = re.compile(
    r"^\s*(?P<start>\d{1,2}[./]\d{1,2}(?:[./]\d{2,4})?)\s*-\s*(?P<end>\d{1,2}[./]\d{1,2}[./]\d{2,4})\s*$"
)
_DATE_FORMATS = ("%d.%m.%Y", "%d.%m.%y", "%d/%m/%Y", "%d/%m/%y")


def normalize_week_label(label: str) -> tuple[str, str]:
    """Return (date_range, menu_type) for a sheet title.

    ``"03.10.2016-07.10.2016 - Diet"`` -> ``("03.10.2016-07.10.2016", "diet")``
    """
    low = (label or "").strip().lower()
    if _DIET_SUFFIX_RE.search(low):
        return _DIET_SUFFIX_RE.sub("", low).strip(), MENU_TYPE_DIET
    return low, MENU_TYPE_REGULAR


def _parse_day(token: str) -> date:
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(token, fmt).date()
        except ValueError:
            continue
    raise ParseError(f"Invalid date {token!r} in week label")


@dataclass(frozen=True)
class WeekDays:
    """Five working days (Monday..Friday) named by a week label."""

    label: str
    menu_type: str
    monday: date

    @classmethod
    def parse(cls, label: str) -> WeekDays:
        date_range, menu_type = normalize_week_label(label)
        m = _RANGE_RE.match(date_range)
        if not m:
            raise ParseError(f"Invalid week label {label!r}")
        end = _parse_day(m.group("end"))
        start_token = m.group("start")
        if start_token.count(".") + start_token.count("/") == 1:
            # "03.10-07.10.2016": the start inherits the end date's year
            sep = "." if "." in start_token else "/"
            start = _parse_day(f"{start_token}{sep}{end.year}")
        else:
            start = _parse_day(start_token)
        if end < start:
            raise ParseError(f"Week label {label!r} ends before it starts")
        monday = start - timedelta(days=start.weekday())
        if end - monday >= timedelta(days=7):
            raise ParseError(f"Week label {label!r} spans more than one week")
        return cls(label=date_range, menu_type=menu_type, monday=monday)

    def at(self, index: int) -> date:
        if not 0 <= index < WEEKDAYS_COUNT:
            raise IndexError(f"weekday index must be in 0..{WEEKDAYS_COUNT - 1}, got {index}")
        return self.monday + timedelta(days=index)

    def first(self) -> date:
        return self.at(0)

    def last(self) -> date:
        return self.at(WEEKDAYS_COUNT - 1)

    def dates(self) -> list[date]:
        return [self.at(i) for i in range(WEEKDAYS_COUNT)]

    def __str__(self) -> str:  # pragma: no cover - logging helper
        return self.label
