"""SQLAlchemy models for the local order store"""

import datetime as dt

from sqlalchemy import Date, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


# --- Menus & Dishes ---
class Dish(Base):
    __tablename__ = "dishes"
    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200))
    type: Mapped[str] = mapped_column(String(20))  # meat, fish, salad, garnish


class Menu(Base):
    __tablename__ = "menus"
    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[dt.date] = mapped_column(Date)
    type: Mapped[str] = mapped_column(String(20))  # diet, regular
    company: Mapped[str] = mapped_column(String(120))


class MenuDish(Base):
    __tablename__ = "menu_dishes"
    id: Mapped[int] = mapped_column(primary_key=True)
    menu_id: Mapped[int] = mapped_column(ForeignKey("menus.id"))
    dish_id: Mapped[int] = mapped_column(ForeignKey("dishes.id"))
    position: Mapped[int] = mapped_column(Integer, default=0)


# --- Users & Orders ---
class LunchUser(Base):
    __tablename__ = "lunch_users"
    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # uuid4
    fullname: Mapped[str] = mapped_column(String(200), unique=True)
    address: Mapped[str] = mapped_column(String(200), nullable=True)
    company: Mapped[str] = mapped_column(String(120), nullable=True)


class Order(Base):
    __tablename__ = "orders"
    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(ForeignKey("lunch_users.id"))
    shipment_date: Mapped[dt.date] = mapped_column(Date)
    city: Mapped[str] = mapped_column(String(80))
    street: Mapped[str] = mapped_column(String(200), nullable=True)
    company: Mapped[str] = mapped_column(String(120), nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=lambda: dt.datetime.now(dt.UTC))

    # lookup index only; (user, date) is intentionally not unique
    __table_args__ = (Index("ix_orders_user_date", "user_id", "shipment_date"),)


class OrderItem(Base):
    __tablename__ = "order_items"
    id: Mapped[int] = mapped_column(primary_key=True)
    order_id: Mapped[int] = mapped_column(ForeignKey("orders.id"))
    dish_id: Mapped[int] = mapped_column(ForeignKey("dishes.id"))
    size: Mapped[str] = mapped_column(String(20))  # big, medium
