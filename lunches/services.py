"""Collaborator wiring.

Builds a WeeklySynchronizer for the configured backend: ``db`` uses the
SQLAlchemy store, ``api`` talks to the remote Lunches API.
"""

from __future__ import annotations

from .api_client import ApiClient, ApiMenuService, ApiOrderStore, ApiUserDirectory
from .config import Config
from .db import create_all, init_engine
from .importers.xlsx_weeks import XlsxWeeksReader
from .store import SqlMenuService, SqlOrderStore, SqlUserDirectory
from .weekly_synchronizer import WeeklySynchronizer


def build_synchronizer(cfg: Config, *, dry_run: bool = False) -> WeeklySynchronizer:
    if cfg.backend == "api":
        client = ApiClient(
            cfg.api_base_uri, cfg.api_access_token, cfg.company, timeout=cfg.http_timeout_seconds
        )
        menus, users, orders = ApiMenuService(client), ApiUserDirectory(client), ApiOrderStore(client)
    elif cfg.backend == "db":
        init_engine(cfg.database_url)
        create_all()
        menus, users, orders = SqlMenuService(), SqlUserDirectory(), SqlOrderStore()
    else:
        raise ValueError(f"unknown backend {cfg.backend!r}")
    return WeeklySynchronizer(
        XlsxWeeksReader(),
        menus,
        users,
        orders,
        company=cfg.company,
        city=cfg.city,
        dry_run=dry_run,
    )


__all__ = ["build_synchronizer"]
