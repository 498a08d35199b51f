"""Domain error taxonomy.

Every error carries a short machine ``code`` and a human ``detail``. They are
caught at the smallest enclosing unit (cell, user, record, week) and logged;
none of them escapes ``WeeklySynchronizer.sync``.
"""
from __future__ import annotations

from typing import Any


class LunchesError(Exception):
    code = "lunches_error"

    def __init__(self, detail: str | None = None, *, code: str | None = None, **extra: Any):
        if code:
            self.code = code
        self.detail = detail or self.code
        self.extra = extra
        super().__init__(self.detail)


class ParseError(LunchesError):
    """Unparsable week label, raw menu record or matrix row."""
    code = "parse_error"


class InvalidVariant(LunchesError):
    code = "invalid_variant"

    def __init__(self, token: str, detail: str | None = None):
        super().__init__(detail or f"Unknown order variant {token!r}", token=token)
        self.token = token


class MenuNotFound(LunchesError):
    code = "menu_not_found"

    def __init__(self, day: Any, detail: str | None = None):
        super().__init__(detail or f"Menu not found for {day}", date=day)
        self.date = day


class UserResolutionError(LunchesError):
    code = "user_resolution_error"


class RemoteSyncError(LunchesError):
    code = "remote_sync_error"


__all__ = [
    "LunchesError",
    "ParseError",
    "InvalidVariant",
    "MenuNotFound",
    "UserResolutionError",
    "RemoteSyncError",
]
