"""Logging for sync runs.

``configure_logging`` wires the ``lunches`` logger to stderr (and optionally a
file). ``RunLogHandler`` keeps WARN+ records of the current run in memory so
the command can close with a list of what went wrong.
"""

from __future__ import annotations

import collections
import logging
import os
import time

LOGGER_NAME = "lunches"

LOG_BUFFER: collections.deque[dict] = collections.deque(maxlen=500)


class RunLogHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:  # type: ignore[override]
        LOG_BUFFER.append(
            {
                "ts": time.time(),
                "level": record.levelname,
                "logger": record.name,
                "msg": self.format(record),
            }
        )


def install_run_log_handler() -> None:
    root = logging.getLogger(LOGGER_NAME)
    # Avoid duplicate attachment on repeated runs in one process
    if any(isinstance(h, RunLogHandler) for h in root.handlers):
        return
    h = RunLogHandler(level=logging.WARNING)
    h.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(h)


def configure_logging(level: str | int = "INFO", log_file: str | None = None) -> logging.Logger:
    log = logging.getLogger(LOGGER_NAME)
    if not any(type(h) is logging.StreamHandler for h in log.handlers):
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
        log.addHandler(h)
    if log_file and not any(isinstance(h, logging.FileHandler) for h in log.handlers):
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s"))
        log.addHandler(fh)
    log.setLevel(level)
    install_run_log_handler()
    return log


def run_warnings() -> list[dict]:
    return list(LOG_BUFFER)


def clear_run_warnings() -> None:
    LOG_BUFFER.clear()


__all__ = [
    "LOG_BUFFER",
    "RunLogHandler",
    "configure_logging",
    "install_run_log_handler",
    "run_warnings",
    "clear_run_warnings",
]
