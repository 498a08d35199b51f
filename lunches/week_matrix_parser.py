"""Sparse week matrix parser

Example matrix (one worksheet range):

    [
        ["Floor 3"],
        ["Ivan Petrov", "Средняя", "", "Большая без салата"],
        ["Olga Ivanova", "", "Only salad"],
        ["Floor 5"],
        ["Anna Smirnova", "Big"],
    ]

Marker rows (first cell starting with ``Floor``) set the delivery address for
every following user row until the next marker. User rows carry the name in
the first cell and up to five weekday tokens (Monday first). Blank cells mean
"nothing ordered that day".
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple

from .week_days import WEEKDAYS_COUNT

log = logging.getLogger(__name__)

ADDRESS_MARKER = "Floor"


class ParsedCell(NamedTuple):
    row_index: int
    user_name: str
    address: str | None
    weekday: int  # 0 = Monday
    token: str


@dataclass(frozen=True)
class RowContext:
    """Accumulator threaded from row to row."""

    address: str | None = None


def _cell_to_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).replace("\ufeff", "").strip()


def parse_row(
    ctx: RowContext, row_index: int, row: Any
) -> tuple[RowContext, list[ParsedCell]]:
    """Fold one row into the context; return (next_context, cells)."""
    if not isinstance(row, (list, tuple)) or not row:
        return ctx, []
    values = [_cell_to_str(c) for c in row]
    if not any(values):
        return ctx, []
    head, tokens = values[0], values[1:]
    if head.startswith(ADDRESS_MARKER):
        return RowContext(address=head), []
    if not head:
        log.warning("Row %d has orders but no user name; skipped", row_index + 1)
        return ctx, []
    if len(tokens) > WEEKDAYS_COUNT and any(tokens[WEEKDAYS_COUNT:]):
        log.debug("Row %d (%s): cells after Friday ignored", row_index + 1, head)
    cells = [
        ParsedCell(row_index, head, ctx.address, weekday, token)
        for weekday, token in enumerate(tokens[:WEEKDAYS_COUNT])
        if token
    ]
    return ctx, cells


class WeekMatrixParser:
    def parse(self, matrix: Sequence[Any] | None) -> Iterator[ParsedCell]:
        """Lazily yield one ParsedCell per non-empty weekday cell.

        Each call starts with a blank address context, so the parser can be
        reused across weeks.
        """
        ctx = RowContext()
        for row_index, row in enumerate(matrix or ()):
            ctx, cells = parse_row(ctx, row_index, row)
            yield from cells


__all__ = ["ADDRESS_MARKER", "ParsedCell", "RowContext", "WeekMatrixParser", "parse_row"]
