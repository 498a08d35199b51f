from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any

from .errors import ParseError
from .menu import DATE_FORMAT


@dataclass(frozen=True)
class User:
    id: str
    fullname: str
    address: str | None = None
    company: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> User:
        if not data.get("id"):
            raise ParseError(f"User record has no id: {dict(data)!r}")
        return cls(
            id=str(data["id"]),
            fullname=str(data.get("fullname") or ""),
            address=data.get("address") or None,
            company=data.get("company") or None,
        )

    def with_address(self, address: str | None) -> User:
        return replace(self, address=address)


@dataclass(frozen=True)
class Address:
    city: str
    street: str | None
    company: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"city": self.city, "street": self.street, "company": self.company}


@dataclass(frozen=True)
class OrderItem:
    dish_id: int | str
    size: str  # big|medium

    def to_dict(self) -> dict[str, Any]:
        return {"dishId": self.dish_id, "size": self.size}


@dataclass(frozen=True)
class OrderRecord:
    shipment_date: date
    user: User
    address: Address
    items: tuple[OrderItem, ...] = field(default_factory=tuple)

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def key(self) -> tuple[str, date]:
        return (self.user.id, self.shipment_date)

    def date_iso(self) -> str:
        return self.shipment_date.strftime(DATE_FORMAT)

    def to_payload(self) -> dict[str, Any]:
        return {
            "shipmentDate": self.date_iso(),
            "userId": self.user.id,
            "address": self.address.to_dict(),
            "items": [i.to_dict() for i in self.items],
        }

    def __str__(self) -> str:  # pragma: no cover - logging helper
        return f"{self.user.fullname} on {self.date_iso()}"


__all__ = ["User", "Address", "OrderItem", "OrderRecord"]
