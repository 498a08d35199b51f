"""Canonical daily menu and its derived variants.

A Menu never changes after construction. Exclusion and filter operations
return a new Menu with the same id/date/type/company and a filtered dish
sequence (relative order kept). An empty result is valid.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any

from .errors import ParseError

DISH_TYPE_MEAT = "meat"
DISH_TYPE_FISH = "fish"
DISH_TYPE_SALAD = "salad"
DISH_TYPE_GARNISH = "garnish"

DISH_TYPES = (DISH_TYPE_MEAT, DISH_TYPE_FISH, DISH_TYPE_SALAD, DISH_TYPE_GARNISH)

MENU_TYPE_DIET = "diet"
MENU_TYPE_REGULAR = "regular"

MENU_TYPES = (MENU_TYPE_DIET, MENU_TYPE_REGULAR)

DATE_FORMAT = "%Y-%m-%d"


@dataclass(frozen=True, slots=True)
class Dish:
    id: int | str
    type: str  # meat|fish|salad|garnish

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Dish:
        if "id" not in data or "type" not in data:
            raise ParseError(f"Dish must have id and type, got {dict(data)!r}")
        dish_type = str(data["type"]).strip().lower()
        if dish_type not in DISH_TYPES:
            raise ParseError(f"Unknown dish type {data['type']!r}")
        return cls(id=data["id"], type=dish_type)


def _coerce_date(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        # service payloads may carry a time part: 2016-10-03T00:00:00+0300
        return datetime.strptime(str(value).strip()[:10], DATE_FORMAT).date()
    except ValueError as e:
        raise ParseError(f"Invalid menu date {value!r}") from e


@dataclass(frozen=True, slots=True)
class Menu:
    id: int
    date: date
    type: str
    company: str
    dishes: tuple[Dish, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not str(self.id).isdigit():
            raise ParseError(f"Menu id must be numeric, got {self.id!r}")
        if not isinstance(self.company, str):
            raise ParseError(f"Menu company must be a string, got {self.company!r}")
        menu_type = str(self.type).strip().lower()
        if menu_type not in MENU_TYPES:
            raise ParseError(f"Menu type must be one of {MENU_TYPES}, got {self.type!r}")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "type", menu_type)
        object.__setattr__(self, "date", _coerce_date(self.date))
        object.__setattr__(self, "dishes", tuple(
            d if isinstance(d, Dish) else Dish.from_dict(d) for d in self.dishes
        ))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Menu:
        for key in ("id", "date", "type", "dishes", "company"):
            if key not in data:
                raise ParseError(f"Menu record is missing {key!r}")
        if not isinstance(data["dishes"], (list, tuple)):
            raise ParseError("Menu dishes must be a list")
        return cls(
            id=data["id"],
            date=data["date"],
            type=data["type"],
            company=data["company"],
            dishes=tuple(data["dishes"]),
        )

    # --- queries ---
    def date_iso(self) -> str:
        return self.date.strftime(DATE_FORMAT)

    def cooking_dish_types(self) -> list[str]:
        seen: list[str] = []
        for dish in self.dishes:
            if dish.type not in seen:
                seen.append(dish.type)
        return seen

    def is_full(self) -> bool:
        types = set(self.cooking_dish_types())
        return (
            (DISH_TYPE_MEAT in types or DISH_TYPE_FISH in types)
            and DISH_TYPE_GARNISH in types
            and DISH_TYPE_SALAD in types
        )

    def is_cooking_at(self, day: date) -> bool:
        return self.date == _coerce_date(day)

    def is_cooking_for(self, company: str) -> bool:
        return self.company == company

    def is_cooking(self, dish: Dish | Mapping[str, Any]) -> bool:
        dish_id = dish.id if isinstance(dish, Dish) else dish.get("id")
        return any(d.id == dish_id for d in self.dishes)

    def dish_ids(self) -> list[int | str]:
        return [d.id for d in self.dishes]

    # --- derived variants ---
    def without_type(self, dish_type: str) -> Menu:
        return self._with_dishes(d for d in self.dishes if d.type != dish_type)

    def only_type(self, dish_type: str) -> Menu:
        return self._with_dishes(d for d in self.dishes if d.type == dish_type)

    def without_meat(self) -> Menu:
        return self.without_type(DISH_TYPE_MEAT)

    def without_salad(self) -> Menu:
        return self.without_type(DISH_TYPE_SALAD)

    def without_garnish(self) -> Menu:
        return self.without_type(DISH_TYPE_GARNISH)

    def only_meat(self) -> Menu:
        return self.only_type(DISH_TYPE_MEAT)

    def only_salad(self) -> Menu:
        return self.only_type(DISH_TYPE_SALAD)

    def only_garnish(self) -> Menu:
        return self.only_type(DISH_TYPE_GARNISH)

    def _with_dishes(self, dishes: Iterable[Dish]) -> Menu:
        return replace(self, dishes=tuple(dishes))


__all__ = [
    "DISH_TYPES",
    "DISH_TYPE_MEAT",
    "DISH_TYPE_FISH",
    "DISH_TYPE_SALAD",
    "DISH_TYPE_GARNISH",
    "MENU_TYPES",
    "MENU_TYPE_DIET",
    "MENU_TYPE_REGULAR",
    "Dish",
    "Menu",
]
