from datetime import datetime

import pytest
from sqlalchemy import create_engine, inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from salesreport.dbmodel import Base, Category, Customer, Order, OrderItem, Product, Region


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as s:
        yield s
    engine.dispose()


def test_table_names():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    names = set(inspect(engine).get_table_names())
    assert names == {"customers", "regions", "categories", "products", "orders", "order_items"}


def test_full_order_round_trip(session):
    customer = Customer(
        customer_id="C1",
        customer_name="Jane Doe",
        customer_email="jane@example.com",
        customer_address="1 Test Road",
    )
    category = Category(category_name="Shoes")
    region = Region(region_name="Europe")
    session.add_all([customer, category, region])
    session.flush()
    product = Product(
        product_id="P1", product_name="Runner", categoryid=category.category_id, unit_price=12.5
    )
    order = Order(
        order_id=42,
        customersid="C1",
        order_date=datetime(2024, 1, 2),
        total_amount=30.0,
        shipping_cost=5.0,
        payment_method="Cash",
        discount=0.25,
        regionid=region.region_id,
    )
    session.add_all([product, order])
    session.flush()
    session.add(OrderItem(ordersid=42, productsid="P1", quantity=2, unit_price=12.5))
    session.commit()

    item = session.scalars(select(OrderItem)).one()
    assert item.order.order_id == 42
    assert item.product.category.category_name == "Shoes"
    assert item.order.customer.customer_email == "jane@example.com"
    assert item.order.region.region_name == "Europe"
    assert item.unit_price == 12.5
    assert item.order.discount == 0.25
    assert item.order.order_date == datetime(2024, 1, 2)


def test_region_ids_autoincrement(session):
    first = Region(region_name="North")
    second = Region(region_name="South")
    session.add_all([first, second])
    session.commit()
    assert first.region_id is not None
    assert second.region_id > first.region_id


def test_customer_email_unique(session):
    session.add(Customer(customer_id="A", customer_name="A", customer_email="a@example.com"))
    session.add(Customer(customer_id="B", customer_name="B", customer_email="a@example.com"))
    with pytest.raises(IntegrityError):
        session.commit()


def test_customer_name_required(session):
    session.add(Customer(customer_id="A", customer_name=None, customer_email="a@example.com"))
    with pytest.raises(IntegrityError):
        session.commit()