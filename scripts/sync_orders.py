from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Synchronize weekly spreadsheet orders into the order store.")
    p.add_argument("--workbook", help="XLSX workbook, one sheet per week (default env LUNCHES_WORKBOOK).")
    p.add_argument("--range", dest="sheet_range", help="Order matrix range on every sheet, e.g. A2:F200.")
    p.add_argument("--backend", choices=["db", "api"], help="Store to synchronize with (default env LUNCHES_BACKEND or db).")
    p.add_argument("--menu-type", choices=["diet", "regular"], help="Only sync weeks of this menu type.")
    p.add_argument("--week-range", help="Only sync the week with this label, e.g. 03.10.2016-07.10.2016.")
    p.add_argument("--dry-run", action="store_true", help="Check existing orders; create neither orders nor users.")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parse_args(argv)

    from lunches import metrics
    from lunches.config import Config
    from lunches.logging_setup import configure_logging, run_warnings
    from lunches.metrics_logging import LoggingMetrics
    from lunches.services import build_synchronizer

    cfg = Config.from_env()
    cfg.override({"workbook": args.workbook, "sheet_range": args.sheet_range, "backend": args.backend})
    problems = cfg.validate()
    if problems:
        for msg in problems:
            print(msg, file=sys.stderr)
        return 2

    configure_logging(cfg.log_level, cfg.log_file)
    log = logging.getLogger("lunches.sync_orders")
    counters = LoggingMetrics()
    metrics.set_metrics(counters)
    try:
        synchronizer = build_synchronizer(cfg, dry_run=args.dry_run)
        reports = synchronizer.sync(
            cfg.workbook, cfg.sheet_range, menu_type=args.menu_type, week_range=args.week_range
        )
    except Exception as e:
        log.error("Synchronization aborted: %s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1
    finally:
        metrics.reset_metrics()

    prefix = "[DRY-RUN] " if args.dry_run else ""
    for r in reports:
        if r.status == "failed":
            print(f"{prefix}{r.label}: failed ({r.error})")
        elif r.status == "filtered":
            continue
        else:
            created = r.would_create if args.dry_run else r.created
            print(
                f"{prefix}{r.label}: created {created}, existing {r.existing}, failed {r.failed}, "
                f"skipped cells {r.skipped_cells}, skipped users {r.skipped_users}"
            )
    synced = sum(1 for r in reports if r.status == "synced")
    failed = sum(1 for r in reports if r.status == "failed")
    print(f"{prefix}synced {synced} weeks, {failed} failed, {len(run_warnings())} warnings")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
