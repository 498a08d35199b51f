from __future__ import annotations

import os
from dataclasses import dataclass

BACKENDS = ("db", "api")


@dataclass
class Config:
    database_url: str = "sqlite:///lunches.db"
    backend: str = "db"  # db|api
    api_base_uri: str = "http://127.0.0.1:8000"
    api_access_token: str = ""
    http_timeout_seconds: float = 10.0
    company: str | None = None
    city: str = "Kiev"
    workbook: str | None = None
    sheet_range: str = "A1:F200"
    log_level: str = "INFO"
    log_file: str | None = None

    @classmethod
    def from_env(cls) -> Config:
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///lunches.db"),
            backend=os.getenv("LUNCHES_BACKEND", "db").strip().lower(),
            api_base_uri=os.getenv("LUNCHES_API_BASE_URI", "http://127.0.0.1:8000").rstrip("/"),
            api_access_token=os.getenv("LUNCHES_API_TOKEN", ""),
            http_timeout_seconds=float(os.getenv("LUNCHES_HTTP_TIMEOUT", "10")),
            company=os.getenv("LUNCHES_COMPANY") or None,
            city=os.getenv("LUNCHES_CITY", "Kiev"),
            workbook=os.getenv("LUNCHES_WORKBOOK") or None,
            sheet_range=os.getenv("LUNCHES_SHEET_RANGE", "A1:F200"),
            log_level=os.getenv("LUNCHES_LOG_LEVEL", "INFO").upper(),
            # e.g. var/logs/synchronizers.log
            log_file=os.getenv("LUNCHES_LOG_FILE") or None,
        )

    def override(self, d: dict):
        for k, v in d.items():
            if v is not None and hasattr(self, k):
                setattr(self, k, v)

    def validate(self) -> list[str]:
        problems = []
        if self.backend not in BACKENDS:
            problems.append(f"backend must be one of {BACKENDS}, got {self.backend!r}")
        if not self.workbook:
            problems.append("workbook is required (--workbook or LUNCHES_WORKBOOK)")
        if self.backend == "api" and not self.api_base_uri:
            problems.append("api_base_uri is required for the api backend")
        return problems
