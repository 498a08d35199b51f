"""Order-variant tokens.

A token written in the spreadsheet picks a portion size and a dish exclusion
rule. The mapping is plain data; keep it that way so it can be audited and
tested row by row.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from .errors import InvalidVariant
from .menu import Menu

SIZE_BIG = "big"
SIZE_MEDIUM = "medium"

EXCLUDE_NONE = "none"
EXCLUDE_WITHOUT_MEAT = "without-meat"
EXCLUDE_WITHOUT_SALAD = "without-salad"
EXCLUDE_WITHOUT_GARNISH = "without-garnish"
EXCLUDE_ONLY_MEAT = "only-meat"
EXCLUDE_ONLY_SALAD = "only-salad"
EXCLUDE_ONLY_GARNISH = "only-garnish"


@dataclass(frozen=True)
class Variant:
    token: str
    size: str
    exclusion: str


# (english token, spreadsheet token, size, exclusion)
VARIANT_TABLE: tuple[tuple[str, str, str, str], ...] = (
    ("Big", "Большая", SIZE_BIG, EXCLUDE_NONE),
    ("Big no meat", "Большая без мяса", SIZE_BIG, EXCLUDE_WITHOUT_MEAT),
    ("Big no salad", "Большая без салата", SIZE_BIG, EXCLUDE_WITHOUT_SALAD),
    ("Big no garnish", "Большая без гарнира", SIZE_BIG, EXCLUDE_WITHOUT_GARNISH),
    ("Medium", "Средняя", SIZE_MEDIUM, EXCLUDE_NONE),
    ("Medium no meat", "Средняя без мяса", SIZE_MEDIUM, EXCLUDE_WITHOUT_MEAT),
    ("Medium no salad", "Средняя без салата", SIZE_MEDIUM, EXCLUDE_WITHOUT_SALAD),
    ("Medium no garnish", "Средняя без гарнира", SIZE_MEDIUM, EXCLUDE_WITHOUT_GARNISH),
    ("Only meat", "Только мясо", SIZE_MEDIUM, EXCLUDE_ONLY_MEAT),
    ("Only salad", "Только салат", SIZE_MEDIUM, EXCLUDE_ONLY_SALAD),
    ("Only garnish", "Только гарнир", SIZE_MEDIUM, EXCLUDE_ONLY_GARNISH),
)

EXCLUSIONS: dict[str, Callable[[Menu], Menu]] = {
    EXCLUDE_NONE: lambda menu: menu,
    EXCLUDE_WITHOUT_MEAT: Menu.without_meat,
    EXCLUDE_WITHOUT_SALAD: Menu.without_salad,
    EXCLUDE_WITHOUT_GARNISH: Menu.without_garnish,
    EXCLUDE_ONLY_MEAT: Menu.only_meat,
    EXCLUDE_ONLY_SALAD: Menu.only_salad,
    EXCLUDE_ONLY_GARNISH: Menu.only_garnish,
}

_WS_RE = re.compile(r"\s+")


def normalize_token(token: str | None) -> str:
    return _WS_RE.sub(" ", (token or "").strip()).casefold()


def _build_lookup() -> dict[str, Variant]:
    lookup: dict[str, Variant] = {}
    for english, local, size, exclusion in VARIANT_TABLE:
        variant = Variant(token=english, size=size, exclusion=exclusion)
        lookup[normalize_token(english)] = variant
        lookup[normalize_token(local)] = variant
    return lookup


_LOOKUP = _build_lookup()


def variant_for(token: str | None) -> Variant:
    variant = _LOOKUP.get(normalize_token(token))
    if variant is None:
        raise InvalidVariant(token or "")
    return variant


def apply_exclusion(menu: Menu, exclusion: str) -> Menu:
    try:
        transform = EXCLUSIONS[exclusion]
    except KeyError:
        raise InvalidVariant(exclusion, f"Unknown exclusion rule {exclusion!r}") from None
    return transform(menu)


__all__ = [
    "SIZE_BIG",
    "SIZE_MEDIUM",
    "EXCLUSIONS",
    "VARIANT_TABLE",
    "Variant",
    "normalize_token",
    "variant_for",
    "apply_exclusion",
]
