import os
import sys
from datetime import date

import pytest

# Path setup before any project imports
ROOT = os.path.dirname(__file__)
PARENT = os.path.abspath(os.path.join(ROOT, ".."))
if PARENT not in sys.path:  # pragma: no cover - environment dependent
    sys.path.insert(0, PARENT)

from lunches.errors import RemoteSyncError, UserResolutionError  # noqa: E402
from lunches.menu import Menu  # noqa: E402
from lunches.records import User  # noqa: E402

MONDAY = date(2016, 10, 3)
WEEK_LABEL = "03.10.2016-07.10.2016"


def make_menu(day=MONDAY, menu_id=1, menu_type="regular", company="acme", dishes=None):
    if dishes is None:
        dishes = [{"id": 1, "type": "meat"}, {"id": 2, "type": "salad"}, {"id": 3, "type": "garnish"}]
    return Menu.from_dict({"id": menu_id, "date": day.isoformat(), "type": menu_type, "dishes": dishes, "company": company})


class FakeUsers:
    """In-memory user directory; names in ``broken`` fail on lookup."""

    def __init__(self, users=None, broken=()):
        self.users = {u.fullname: u for u in (users or [])}
        self.broken = set(broken)
        self.created: list[User] = []

    def find_one(self, name):
        if name in self.broken:
            raise UserResolutionError(f"directory down for {name}")
        return self.users.get(name)

    def create(self, name, address):
        user = User(id=f"u-{len(self.users) + 1}", fullname=name, address=address, company="acme")
        self.users[name] = user
        self.created.append(user)
        return user


class FakeOrders:
    """In-memory order store keyed by (user id, date)."""

    def __init__(self, fail_for=()):
        self.orders: dict = {}
        self.fail_for = set(fail_for)
        self.create_calls = 0

    def find_one(self, record):
        if record.user.fullname in self.fail_for:
            raise RemoteSyncError("400 Bad Request")
        return self.orders.get(record.key)

    def create(self, record):
        self.create_calls += 1
        self.orders[record.key] = record.to_payload()
        return self.orders[record.key]


class FakeMenus:
    def __init__(self, menus=None, error=None):
        self.menus = list(menus or [])
        self.error = error
        self.calls = []

    def find_between(self, start, end):
        self.calls.append((start, end))
        if self.error:
            raise self.error
        return [m for m in self.menus if start <= m.date <= end]


class FakeReader:
    def __init__(self, weeks):
        self.weeks = weeks

    def list_weeks(self, sheet_id, sheet_range):
        yield from self.weeks


@pytest.fixture
def week_menus():
    return [make_menu(day=MONDAY.replace(day=3 + i), menu_id=10 + i) for i in range(5)]


@pytest.fixture
def sqlite_db(tmp_path):
    from lunches.db import create_all, init_engine

    url = f"sqlite:///{tmp_path / 'lunches.db'}"
    init_engine(url, force=True)
    create_all()
    return url


@pytest.fixture(autouse=True)
def _reset_metrics():
    from lunches import metrics

    yield
    metrics.reset_metrics()
