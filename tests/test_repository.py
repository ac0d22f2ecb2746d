from datetime import date, datetime

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from salesreport.csvmodel import CsvOrder
from salesreport.database import connect_to_database
from salesreport.dbmodel import Category, Customer, Order, OrderItem, Product, Region
from salesreport.repository import Repository
from salesreport.utils import total_amount


@pytest.fixture
def factory():
    return connect_to_database("sqlite://")


@pytest.fixture
def repo(factory):
    return Repository(factory)


def make_order(**overrides):
    values = dict(
        order_id=1,
        product_id="P1",
        customer_id="C1",
        product_name="Widget",
        category="Tools",
        region="North",
        date_of_sale="2024-01-05",
        quantity_sold=2,
        unit_price=10.5,
        discount=1.0,
        shipping_cost=3.0,
        payment_method="Card",
        customer_name="Ann",
        customer_email="ann@example.com",
        customer_address="1 Road",
    )
    values.update(overrides)
    return CsvOrder(**values)


def count(factory, model):
    with factory() as session:
        return session.execute(select(func.count()).select_from(model)).scalar()


def test_store_customer_twice_keeps_first(repo, factory):
    repo.store_customer_data(make_order())
    repo.store_customer_data(make_order(customer_name="Other"))
    with factory() as session:
        customer = session.get(Customer, "C1")
    assert customer.customer_name == "Ann"
    assert customer.customer_email == "ann@example.com"
    assert count(factory, Customer) == 1


def test_duplicate_email_for_new_customer_raises(repo):
    repo.store_customer_data(make_order())
    with pytest.raises(IntegrityError):
        repo.store_customer_data(make_order(customer_id="C2"))


def test_category_is_reused_by_name(repo, factory):
    first = repo.store_category_data(make_order())
    again = repo.store_category_data(make_order())
    other = repo.store_category_data(make_order(category="Toys"))
    assert first.category_id == again.category_id
    assert other.category_id != first.category_id
    assert first.category_name == "Tools"
    assert count(factory, Category) == 2


def test_region_is_reused_by_name(repo, factory):
    first = repo.store_region_data(make_order())
    again = repo.store_region_data(make_order())
    other = repo.store_region_data(make_order(region="South"))
    assert first.region_id == again.region_id
    assert other.region_id != first.region_id
    assert other.region_name == "South"
    assert count(factory, Region) == 2


def test_store_product_links_category_and_skips_existing(repo, factory):
    category = repo.store_category_data(make_order())
    repo.store_product(make_order(), category.category_id)
    repo.store_product(make_order(product_name="Renamed"), category.category_id)
    with factory() as session:
        product = session.get(Product, "P1")
    assert product.product_name == "Widget"
    assert product.categoryid == category.category_id
    assert product.unit_price == pytest.approx(10.5)


def test_store_order_details_computes_total(repo, factory):
    row = make_order()
    repo.store_order_details(row, 7)
    with factory() as session:
        order = session.get(Order, 1)
    assert order.total_amount == total_amount(2, 10.5, 3.0, 1.0)
    assert order.order_date == datetime(2024, 1, 5)
    assert order.regionid == 7
    assert order.customersid == "C1"
    assert order.payment_method == "Card"


def test_store_order_details_skips_existing(repo, factory):
    repo.store_order_details(make_order(), 1)
    repo.store_order_details(make_order(payment_method="Cash"), 1)
    with factory() as session:
        order = session.get(Order, 1)
    assert order.payment_method == "Card"
    assert count(factory, Order) == 1


def test_store_order_details_rejects_bad_date(repo, factory):
    with pytest.raises(ValueError):
        repo.store_order_details(make_order(date_of_sale="05/01/2024"), 1)
    assert count(factory, Order) == 0


def test_store_order_item_adds_every_line(repo, factory):
    repo.store_order_item(make_order(), 1, "P1")
    repo.store_order_item(make_order(quantity_sold=4), 1, "P2")
    with factory() as session:
        items = session.scalars(select(OrderItem).order_by(OrderItem.order_item_id)).all()
    assert [(i.ordersid, i.productsid, i.quantity) for i in items] == [
        (1, "P1", 2),
        (1, "P2", 4),
    ]


def test_totals_use_inclusive_range(repo):
    repo.store_order_details(make_order(order_id=1, date_of_sale="2024-01-01"), 1)
    repo.store_order_details(
        make_order(order_id=2, customer_id="C2", date_of_sale="2024-01-31"), 1
    )
    repo.store_order_details(
        make_order(order_id=3, customer_id="C3", date_of_sale="2024-02-01"), 1
    )
    start, end = datetime(2024, 1, 1), datetime(2024, 1, 31)
    assert repo.get_total_orders(start, end) == 2
    assert repo.get_total_customers(start, end) == 2
    assert repo.get_total_orders(date(2024, 1, 1), date(2024, 2, 1)) == 3


def test_customers_counted_once(repo):
    repo.store_order_details(make_order(order_id=1), 1)
    repo.store_order_details(make_order(order_id=2), 1)
    start, end = datetime(2024, 1, 1), datetime(2024, 12, 31)
    assert repo.get_total_customers(start, end) == 1
    assert repo.get_total_orders(start, end) == 2


def test_average_empty_range_is_zero(repo):
    assert repo.get_average_value(datetime(2024, 1, 1), datetime(2024, 1, 31)) == 0.0
    assert repo.get_total_orders(datetime(2024, 1, 1), datetime(2024, 1, 31)) == 0


def test_average_of_single_order_is_its_total(repo, factory):
    repo.store_order_details(make_order(), 1)
    with factory() as session:
        stored = session.get(Order, 1).total_amount
    average = repo.get_average_value(datetime(2024, 1, 1), datetime(2024, 1, 31))
    assert average == pytest.approx(stored)


def test_average_lies_between_order_totals(repo, factory):
    repo.store_order_details(make_order(order_id=1, quantity_sold=1), 1)
    repo.store_order_details(make_order(order_id=2, quantity_sold=5), 1)
    with factory() as session:
        totals = sorted(session.scalars(select(Order.total_amount)).all())
    average = repo.get_average_value(datetime(2024, 1, 1), datetime(2024, 1, 31))
    assert totals[0] < average < totals[-1]