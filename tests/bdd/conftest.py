"""Shared BDD fixtures and step definitions for the storefront."""

import pytest
from pytest_bdd import given, parsers, then, when
from storefront.catalogue.product import Product
from storefront.session import open_storefront

CUSTOMER_ID = "user123"

SHIPPING_ADDRESS = {
    "street": "Rua das Flores, 123",
    "city": "São Paulo",
    "state": "SP",
    "zip_code": "01234-567",
    "country": "Brasil",
}
PAYMENT_METHOD = {"method_type": "pix", "details": "PIX"}


@pytest.fixture()
def outcome():
    """Container for the result of the last When step."""
    return {"succeeded": None, "error": None, "order": None}


def record(outcome, succeeded, view_model):
    outcome["succeeded"] = succeeded
    outcome["error"] = view_model.error


def place_order(session, outcome):
    order = session.orders_view.create_order(CUSTOMER_ID, SHIPPING_ADDRESS, PAYMENT_METHOD)
    record(outcome, order is not None, session.orders_view)
    outcome["order"] = order
    return order


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty storefront", target_fixture="session")
def empty_storefront():
    return open_storefront(customer_id=CUSTOMER_ID, seed=False, latency=0)


@given("the demo storefront", target_fixture="session")
def demo_storefront():
    return open_storefront(customer_id=CUSTOMER_ID, latency=0)


@given(parsers.cfparse('a product "{product_id}" named "{name}" priced {price:g} with {stock:d} units in stock'))
def stocked_product(session, product_id, name, price, stock):
    session.catalog.add(Product(id=product_id, name=name, price=price, category="misc", stock=stock))


@given(parsers.cfparse('the shopper has placed an order for {quantity:d} of "{product_id}"'))
def placed_order(session, outcome, quantity, product_id):
    session.products_view.add_to_cart(session.catalog.get_by_id(product_id), quantity)
    assert place_order(session, outcome) is not None


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper adds {quantity:d} of "{product_id}" to the cart'))
def add_to_cart(session, outcome, quantity, product_id):
    product = session.catalog.get_by_id(product_id)
    record(outcome, session.products_view.add_to_cart(product, quantity), session.products_view)


@when(parsers.cfparse('the shopper sets the quantity of "{product_id}" to {quantity:d}'))
def set_quantity(session, outcome, product_id, quantity):
    result = session.products_view.update_cart_quantity(product_id, quantity)
    record(outcome, result, session.products_view)


@when(parsers.cfparse('the shopper removes "{product_id}" from the cart'))
def remove_from_cart(session, outcome, product_id):
    record(outcome, session.products_view.remove_from_cart(product_id), session.products_view)


@when("the shopper checks out")
def check_out(session, outcome):
    place_order(session, outcome)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the operation succeeds")
def operation_succeeds(outcome):
    assert outcome["succeeded"] is True
    assert outcome["error"] is None


@then(parsers.cfparse('the operation fails with "{message}"'))
def operation_fails(outcome, message):
    assert outcome["succeeded"] is False
    assert message in outcome["error"]


@then(parsers.cfparse("the cart {part} is {amount:g}"))
def cart_amount(session, part, amount):
    assert getattr(session.cart.get_summary(), part) == pytest.approx(amount)


@then("the cart is empty")
def cart_is_empty(session):
    assert session.cart.is_empty()


@then(parsers.cfparse('the cart holds {quantity:d} of "{product_id}"'))
def cart_holds(session, quantity, product_id):
    assert session.cart.get_item_quantity(product_id) == quantity


@then(parsers.cfparse('"{product_id}" has {stock:d} units in stock'))
def product_stock(session, product_id, stock):
    assert session.catalog.get_by_id(product_id).stock == stock


@then(parsers.cfparse("the customer has {count:d} orders"))
def customer_order_count(session, count):
    assert session.orders_view.get_order_count(CUSTOMER_ID) == count


@then("the most recent order is the placed order")
def most_recent_is_placed(session, outcome):
    assert session.orders_view.get_recent_orders(CUSTOMER_ID, limit=1)[0].id == outcome["order"].id
