from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from .errors import MenuNotFound
from .menu import Dish, Menu
from .records import OrderItem
from .variants import EXCLUSIONS, apply_exclusion, variant_for

log = logging.getLogger(__name__)


class MenuVariantIndex:
    """Per-week lookup: date -> exclusion rule -> resolved dishes.

    Every derived menu is computed once at construction; lookups never touch
    the canonical menus again.
    """

    def __init__(self, menus: Iterable[Menu]):
        self._by_date: dict[date, dict[str, tuple[Dish, ...]]] = {}
        self._menus: dict[date, Menu] = {}
        for menu in menus:
            if menu.date in self._menus:
                log.warning(
                    "Menu %s on %s ignored: menu %s already indexed for that date",
                    menu.id, menu.date_iso(), self._menus[menu.date].id,
                )
                continue
            self._menus[menu.date] = menu
            self._by_date[menu.date] = {
                exclusion: apply_exclusion(menu, exclusion).dishes for exclusion in EXCLUSIONS
            }

    def dates(self) -> list[date]:
        return sorted(self._by_date)

    def menu_for(self, day: date) -> Menu:
        try:
            return self._menus[day]
        except KeyError:
            raise MenuNotFound(day) from None

    def resolve(self, day: date, token: str) -> tuple[Dish, ...]:
        variants = self._by_date.get(day)
        if variants is None:
            raise MenuNotFound(day)
        return variants[variant_for(token).exclusion]

    def items(self, day: date, token: str) -> tuple[OrderItem, ...]:
        size = variant_for(token).size
        return tuple(OrderItem(dish_id=d.id, size=size) for d in self.resolve(day, token))

    def __len__(self) -> int:
        return len(self._by_date)


__all__ = ["MenuVariantIndex"]
