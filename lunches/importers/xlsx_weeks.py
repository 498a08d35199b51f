from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date, datetime
from io import BytesIO
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.utils.cell import range_boundaries

from ..collaborators import WeekSheet
from ..errors import ParseError

log = logging.getLogger(__name__)

__all__ = ["XlsxWeeksReader", "cell_to_str"]


class XlsxWeeksReader:
    """Read order weeks from a workbook: one worksheet per week.

    The worksheet title is the week label (``03.10.2016-07.10.2016 - diet``)
    and ``sheet_range`` (A1 notation, e.g. ``A2:F200``) selects the order
    matrix on every sheet.
    """

    def list_weeks(self, sheet_id: str | Path | bytes, sheet_range: str) -> Iterator[WeekSheet]:
        """Yield ``(title, rows)`` per worksheet.

        A sheet that cannot be read is yielded as ``(title, ParseError)`` so
        the caller reports that week and moves on to the next one.
        """
        bounds = _bounds(sheet_range)
        source: Any = BytesIO(sheet_id) if isinstance(sheet_id, bytes) else sheet_id
        wb = openpyxl.load_workbook(source, read_only=True, data_only=True)
        try:
            for title in wb.sheetnames:
                try:
                    rows = _read_rows(wb[title], bounds)
                except Exception as e:
                    log.error("Can't read week sheet %s due to: %s", title, e)
                    yield title, ParseError(f"Sheet {title!r} could not be read: {e}")
                    continue
                yield title, rows
        finally:
            wb.close()


def _read_rows(ws: Any, bounds: tuple[int, int, int, int]) -> list[list[str]]:
    min_col, min_row, max_col, max_row = bounds
    return [
        [cell_to_str(c) for c in row]
        for row in ws.iter_rows(
            min_row=min_row, max_row=max_row, min_col=min_col, max_col=max_col, values_only=True
        )
    ]


def _bounds(sheet_range: str) -> tuple[int, int, int, int]:
    # "Orders!A2:F200" -> "A2:F200"; the sheet part is replaced per week
    ref = sheet_range.split("!", 1)[-1].strip()
    try:
        min_col, min_row, max_col, max_row = range_boundaries(ref)
    except ValueError as e:
        raise ParseError(f"Invalid sheet range {sheet_range!r}") from e
    if None in (min_col, min_row, max_col, max_row):
        raise ParseError(f"Sheet range {sheet_range!r} must be bounded (e.g. A1:F200)")
    return min_col, min_row, max_col, max_row  # type: ignore[return-value]


def cell_to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    if isinstance(value, date):
        return value.strftime("%d.%m.%Y")
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).replace("\ufeff", "").strip()
