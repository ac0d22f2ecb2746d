"""Persistence of sales rows and the report queries run over stored orders."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable

from sqlalchemy import distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from salesreport.csvmodel import CsvOrder
from salesreport.dbmodel import Category, Customer, Order, OrderItem, Product, Region
from salesreport.utils import parse_date, total_amount

logger = logging.getLogger(__name__)


def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, datetime.min.time())


class Repository:
    """Stores CSV order rows into the database and answers report queries."""

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _session(self):
        return self._session_factory.begin()

    def store_customer_data(self, data: CsvOrder) -> None:
        """Insert the row's customer unless one with the same id exists."""
        try:
            with self._session() as session:
                if session.get(Customer, data.customer_id) is not None:
                    logger.info(
                        "skipping the data insert; customer id = %s already exists",
                        data.customer_id,
                    )
                    return
                session.add(
                    Customer(
                        customer_id=data.customer_id,
                        customer_name=data.customer_name,
                        customer_email=data.customer_email,
                        customer_address=data.customer_address,
                    )
                )
        except SQLAlchemyError as exc:
            logger.error(
                "failed to store the data to db; customer_id = %s: %s", data.customer_id, exc
            )
            raise

    def store_category_data(self, data: CsvOrder) -> Category:
        """Return the category named in the row, creating it if needed."""
        try:
            with self._session() as session:
                category = session.scalars(
                    select(Category)
                    .where(Category.category_name == data.category)
                    .order_by(Category.category_id)
                    .limit(1)
                ).first()
                if category is not None:
                    logger.info(
                        "skipping the data insert; category = %s already exists", data.category
                    )
                else:
                    category = Category(category_name=data.category)
                    session.add(category)
                    session.flush()
                session.expunge(category)
                return category
        except SQLAlchemyError as exc:
            logger.error("failed to store the data to db; category = %s: %s", data.category, exc)
            raise

    def store_region_data(self, data: CsvOrder) -> Region:
        """Return the region named in the row, creating it if needed."""
        try:
            with self._session() as session:
                region = session.scalars(
                    select(Region)
                    .where(Region.region_name == data.region)
                    .order_by(Region.region_id)
                    .limit(1)
                ).first()
                if region is not None:
                    logger.info("skipping insert; region = %s already exists", data.region)
                else:
                    region = Region(region_name=data.region)
                    session.add(region)
                    session.flush()
                session.expunge(region)
                return region
        except SQLAlchemyError as exc:
            logger.error("failed to store the data to db; region = %s: %s", data.region, exc)
            raise

    def store_product(self, data: CsvOrder, category_id: int) -> None:
        """Insert the row's product unless one with the same id exists."""
        try:
            with self._session() as session:
                if session.get(Product, data.product_id) is not None:
                    logger.info(
                        "skipping insert; product_id = %s already exists", data.product_id
                    )
                    return
                session.add(
                    Product(
                        product_id=data.product_id,
                        product_name=data.product_name,
                        categoryid=category_id,
                        unit_price=data.unit_price,
                    )
                )
        except SQLAlchemyError as exc:
            logger.error(
                "failed to store the data to db; product_id = %s: %s", data.product_id, exc
            )
            raise

    def store_order_details(self, data: CsvOrder, region_id: int) -> None:
        """Insert the row's order unless one with the same id exists.

        Raises ValueError when the sale date is not in ``YYYY-MM-DD`` form.
        """
        try:
            with self._session() as session:
                if session.get(Order, data.order_id) is not None:
                    logger.info("skipping insert; order_id = %d already exists", data.order_id)
                    return
                try:
                    order_date = parse_date(data.date_of_sale)
                except ValueError:
                    logger.error("could not parse the date %r", data.date_of_sale)
                    raise
                session.add(
                    Order(
                        order_id=data.order_id,
                        customersid=data.customer_id,
                        order_date=order_date,
                        total_amount=total_amount(
                            data.quantity_sold,
                            data.unit_price,
                            data.shipping_cost,
                            data.discount,
                        ),
                        shipping_cost=data.shipping_cost,
                        payment_method=data.payment_method,
                        discount=data.discount,
                        regionid=region_id,
                    )
                )
        except SQLAlchemyError as exc:
            logger.error(
                "failed to store the data to db; order_id = %d: %s", data.order_id, exc
            )
            raise

    def store_order_item(self, data: CsvOrder, order_id: int, product_id: str) -> None:
        """Insert one order line for the given order and product."""
        try:
            with self._session() as session:
                session.add(
                    OrderItem(
                        ordersid=order_id,
                        productsid=product_id,
                        quantity=data.quantity_sold,
                        unit_price=data.unit_price,
                    )
                )
        except SQLAlchemyError as exc:
            logger.error(
                "failed to store the data to db; product_id = %s: %s", data.product_id, exc
            )
            raise

    def _scalar_between(self, expression, start_date, end_date, what: str):
        stmt = select(expression).where(
            Order.order_date.between(_as_datetime(start_date), _as_datetime(end_date))
        )
        try:
            with self._session_factory() as session:
                return session.execute(stmt).scalar()
        except SQLAlchemyError as exc:
            logger.error("could not fetch the %s: %s", what, exc)
            raise

    def get_total_customers(self, start_date: date | datetime, end_date: date | datetime) -> int:
        """Number of distinct customers with orders dated within the inclusive range."""
        value = self._scalar_between(
            func.count(distinct(Order.customersid)), start_date, end_date, "total customers"
        )
        return int(value or 0)

    def get_total_orders(self, start_date: date | datetime, end_date: date | datetime) -> int:
        """Number of distinct orders dated within the inclusive range."""
        value = self._scalar_between(
            func.count(distinct(Order.order_id)), start_date, end_date, "total orders"
        )
        return int(value or 0)

    def get_average_value(self, start_date: date | datetime, end_date: date | datetime) -> float:
        """Mean order total within the inclusive range, or 0 when there are no orders."""
        expression = func.coalesce(
            func.sum(Order.total_amount) / func.nullif(func.count(Order.order_id), 0), 0
        )
        value = self._scalar_between(expression, start_date, end_date, "avg value")
        return float(value or 0)