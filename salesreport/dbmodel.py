"""Relational tables for customers, products, orders and their items."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative base for all sales tables."""


class Customer(Base):
    __tablename__ = "customers"

    customer_id: Mapped[str] = mapped_column(String, primary_key=True)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    customer_address: Mapped[Optional[str]] = mapped_column(Text)


class Region(Base):
    __tablename__ = "regions"

    region_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    region_name: Mapped[str] = mapped_column(String(255), nullable=False)


class Category(Base):
    __tablename__ = "categories"

    category_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, unique=True
    )
    category_name: Mapped[str] = mapped_column(String(255), nullable=False)


class Product(Base):
    __tablename__ = "products"

    product_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    categoryid: Mapped[Optional[int]] = mapped_column(ForeignKey("categories.category_id"))
    unit_price: Mapped[Optional[float]] = mapped_column(Numeric(10, 2, asdecimal=False))

    category: Mapped[Optional[Category]] = relationship()


class Order(Base):
    __tablename__ = "orders"

    order_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    customersid: Mapped[Optional[str]] = mapped_column(ForeignKey("customers.customer_id"))
    order_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    total_amount: Mapped[float] = mapped_column(Float, nullable=False)
    shipping_cost: Mapped[float] = mapped_column(Float, nullable=False)
    payment_method: Mapped[Optional[str]] = mapped_column(String(255))
    discount: Mapped[Optional[float]] = mapped_column(Numeric(10, 2, asdecimal=False))
    regionid: Mapped[Optional[int]] = mapped_column(ForeignKey("regions.region_id"))

    customer: Mapped[Optional[Customer]] = relationship()
    region: Mapped[Optional[Region]] = relationship()


class OrderItem(Base):
    __tablename__ = "order_items"

    order_item_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ordersid: Mapped[Optional[int]] = mapped_column(ForeignKey("orders.order_id"))
    productsid: Mapped[Optional[str]] = mapped_column(ForeignKey("products.product_id"))
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Optional[float]] = mapped_column(Numeric(10, 2, asdecimal=False))

    order: Mapped[Optional[Order]] = relationship()
    product: Mapped[Optional[Product]] = relationship()