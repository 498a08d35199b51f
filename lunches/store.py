"""SQLAlchemy-backed collaborators (local store).

Implements MenuService, UserDirectory and OrderStore against the tables in
``lunches.models``. Database failures surface as domain errors so the
pipeline isolates them exactly like remote API failures.
"""

from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from .db import get_new_session
from .errors import RemoteSyncError, UserResolutionError
from .menu import Dish, Menu
from .models import Dish as DishRow
from .models import LunchUser
from .models import Menu as MenuRow
from .models import MenuDish
from .models import Order as OrderRow
from .models import OrderItem as OrderItemRow
from .records import OrderRecord, User


class SqlMenuService:
    def find_between(self, start: date, end: date) -> list[Menu]:
        db = get_new_session()
        try:
            rows = db.execute(
                select(MenuRow).where(MenuRow.date >= start, MenuRow.date <= end).order_by(MenuRow.date, MenuRow.id)
            ).scalars().all()
            menus = []
            for row in rows:
                dishes = db.execute(
                    select(DishRow.id, DishRow.type)
                    .join(MenuDish, MenuDish.dish_id == DishRow.id)
                    .where(MenuDish.menu_id == row.id)
                    .order_by(MenuDish.position, MenuDish.id)
                ).all()
                menus.append(
                    Menu(
                        id=row.id,
                        date=row.date,
                        type=row.type,
                        company=row.company,
                        dishes=tuple(Dish(id=d[0], type=d[1]) for d in dishes),
                    )
                )
            return menus
        except SQLAlchemyError as e:
            raise RemoteSyncError(f"Menus between {start} and {end} could not be loaded: {e}") from e
        finally:
            db.close()

    def save_menu(self, menu_date: date, menu_type: str, company: str, dishes: list[dict]) -> int:
        """Store a menu; ``dishes`` items are ``{"name", "type"}`` (optional ``id``)."""
        db = get_new_session()
        try:
            row = MenuRow(date=menu_date, type=menu_type, company=company)
            db.add(row)
            db.flush()
            for position, d in enumerate(dishes):
                dish = db.get(DishRow, d["id"]) if d.get("id") is not None else None
                if dish is None:
                    dish = DishRow(id=d.get("id"), name=d.get("name") or d["type"], type=d["type"])
                    db.add(dish)
                    db.flush()
                db.add(MenuDish(menu_id=row.id, dish_id=dish.id, position=position))
            db.commit()
            return row.id
        finally:
            db.close()


class SqlUserDirectory:
    def find_one(self, name: str) -> User | None:
        db = get_new_session()
        try:
            row = db.execute(select(LunchUser).where(LunchUser.fullname == name)).scalars().first()
            return _user(row) if row else None
        except SQLAlchemyError as e:
            raise UserResolutionError(f"User {name} lookup failed: {e}") from e
        finally:
            db.close()

    def create(self, name: str, address: str | None, company: str | None = None) -> User:
        db = get_new_session()
        try:
            row = LunchUser(id=str(uuid.uuid4()), fullname=name, address=address, company=company)
            db.add(row)
            db.commit()
            return _user(row)
        except SQLAlchemyError as e:
            db.rollback()
            raise UserResolutionError(f"User {name} could not be created: {e}") from e
        finally:
            db.close()


def _user(row: LunchUser) -> User:
    return User(id=row.id, fullname=row.fullname, address=row.address, company=row.company)


class SqlOrderStore:
    def find_one(self, record: OrderRecord) -> dict | None:
        db = get_new_session()
        try:
            row = db.execute(
                select(OrderRow).where(
                    OrderRow.user_id == record.user_id,
                    OrderRow.shipment_date == record.shipment_date,
                )
            ).scalars().first()
            return _order(db, row) if row else None
        except SQLAlchemyError as e:
            raise RemoteSyncError(f"Order lookup failed: {e}") from e
        finally:
            db.close()

    def create(self, record: OrderRecord) -> dict:
        db = get_new_session()
        try:
            row = OrderRow(
                user_id=record.user_id,
                shipment_date=record.shipment_date,
                city=record.address.city,
                street=record.address.street,
                company=record.address.company,
            )
            db.add(row)
            db.flush()
            for item in record.items:
                db.add(OrderItemRow(order_id=row.id, dish_id=item.dish_id, size=item.size))
            db.commit()
            return _order(db, row)
        except SQLAlchemyError as e:
            db.rollback()
            raise RemoteSyncError(f"Order {record} could not be created: {e}") from e
        finally:
            db.close()


def _order(db, row: OrderRow) -> dict:
    items = db.execute(
        select(OrderItemRow.dish_id, OrderItemRow.size)
        .where(OrderItemRow.order_id == row.id)
        .order_by(OrderItemRow.id)
    ).all()
    return {
        "id": row.id,
        "userId": row.user_id,
        "shipmentDate": row.shipment_date.isoformat(),
        "address": {"city": row.city, "street": row.street, "company": row.company},
        "items": [{"dishId": i[0], "size": i[1]} for i in items],
    }


__all__ = ["SqlMenuService", "SqlUserDirectory", "SqlOrderStore"]
