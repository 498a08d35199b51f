from __future__ import annotations

import os
import subprocess
import sys
from datetime import date

from openpyxl import Workbook

from lunches.db import create_all, init_engine
from lunches.store import SqlMenuService

DISHES = [{"name": "Cutlet", "type": "meat"}, {"name": "Olivier", "type": "salad"}, {"name": "Rice", "type": "garnish"}]


def _prepare(tmp_path):
    db_url = f"sqlite:///{tmp_path / 'cli.db'}"
    init_engine(db_url, force=True)
    create_all()
    menus = SqlMenuService()
    for day in range(3, 8):
        menus.save_menu(date(2016, 10, day), "regular", "acme", DISHES)
    wb = Workbook()
    ws = wb.active
    ws.title = "03.10.2016-07.10.2016"
    for row in (["Floor 3"], ["Ivan", "Big", "", "Unknown"], ["Olga", "", "Only salad"]):
        ws.append(row)
    broken = wb.create_sheet("next week maybe")
    broken.append(["Ivan", "Big"])
    path = tmp_path / "orders.xlsx"
    wb.save(path)
    return db_url, path


def _run(db_url, *args):
    env = os.environ.copy()
    env["PYTHONPATH"] = os.getcwd() + os.pathsep + env.get("PYTHONPATH", "")
    env["DATABASE_URL"] = db_url
    env["LUNCHES_BACKEND"] = "db"
    env.pop("LUNCHES_WORKBOOK", None)
    return subprocess.run(
        [sys.executable, "scripts/sync_orders.py", *args],
        capture_output=True,
        text=True,
        env=env,
    )


def test_cli_sync_then_idempotent(tmp_path):
    db_url, path = _prepare(tmp_path)
    proc1 = _run(db_url, "--workbook", str(path), "--range", "A1:F20")
    assert proc1.returncode == 0, proc1.stderr
    assert "03.10.2016-07.10.2016: created 2, existing 0, failed 0, skipped cells 1" in proc1.stdout
    assert "next week maybe: failed" in proc1.stdout
    assert "synced 1 weeks, 1 failed" in proc1.stdout
    proc2 = _run(db_url, "--workbook", str(path), "--range", "A1:F20")
    assert proc2.returncode == 0, proc2.stderr
    assert "created 0, existing 2" in proc2.stdout


def test_cli_dry_run(tmp_path):
    db_url, path = _prepare(tmp_path)
    proc = _run(db_url, "--workbook", str(path), "--range", "A1:F20", "--dry-run", "--week-range", "03.10.2016-07.10.2016")
    assert proc.returncode == 0, proc.stderr
    assert "[DRY-RUN] 03.10.2016-07.10.2016: created 2" in proc.stdout
    assert "failed (" not in proc.stdout


def test_cli_requires_workbook(tmp_path):
    proc = _run(f"sqlite:///{tmp_path / 'x.db'}")
    assert proc.returncode == 2
    assert "workbook is required" in proc.stderr
