"""Seed a demo week into the local store and write a matching order workbook.

Usage: python scripts/seed_demo_week.py --monday 2016-10-03 --workbook demo.xlsx
"""

from __future__ import annotations

import argparse
import os
import sys
from datetime import date, timedelta

from openpyxl import Workbook

DEMO_DISHES = [
    {"name": "Chicken Kiev", "type": "meat"},
    {"name": "Olivier salad", "type": "salad"},
    {"name": "Buckwheat", "type": "garnish"},
]

DEMO_ORDERS = [
    ["Floor 3"],
    ["Ivan Petrov", "Средняя", "", "Большая без салата", "Only salad", "Big"],
    ["Olga Ivanova", "", "Medium no meat"],
    ["Floor 5"],
    ["Anna Smirnova", "Big", "Big", "Big", "Big", "Big"],
]


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Seed demo menus and an order workbook.")
    p.add_argument("--monday", type=date.fromisoformat, default=date(2016, 10, 3))
    p.add_argument("--workbook", default="demo_orders.xlsx")
    p.add_argument("--company", default=os.getenv("LUNCHES_COMPANY", "demo"))
    return p.parse_args()


def main() -> int:
    args = _parse_args()
    if args.monday.weekday() != 0:
        print("--monday must be a Monday", file=sys.stderr)
        return 2

    from lunches.db import create_all, init_engine
    from lunches.store import SqlMenuService

    init_engine(os.getenv("DATABASE_URL") or "sqlite:///lunches.db")
    create_all()
    menus = SqlMenuService()
    days = [args.monday + timedelta(days=i) for i in range(5)]
    dish_ids: list[int] = []
    for d in days:
        # reuse the dishes created for Monday on the other days
        dishes = [dict(dish, id=i) for i, dish in zip(dish_ids, DEMO_DISHES)] or DEMO_DISHES
        menus.save_menu(d, "regular", args.company, dishes)
        if not dish_ids:
            dish_ids = [int(dish.id) for dish in menus.find_between(d, d)[0].dishes]

    wb = Workbook()
    ws = wb.active
    ws.title = f"{days[0]:%d.%m.%Y}-{days[-1]:%d.%m.%Y}"
    for row in DEMO_ORDERS:
        ws.append(row)
    wb.save(args.workbook)
    print(f"seeded {len(days)} menus, wrote {args.workbook} (sheet {ws.title})")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
