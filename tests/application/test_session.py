"""Tests for wiring a storefront session."""

from storefront.cart.pricing import PricingRules
from storefront.session import open_storefront


def test_seeded_session():
    session = open_storefront(customer_id="user123", latency=0)
    assert len(session.catalog.get_all()) == 6
    assert session.orders.get_order_count("user123") == 2
    assert session.cart.is_empty()


def test_view_models_share_the_cart(shipping_address, payment_method):
    session = open_storefront(customer_id="user123", latency=0)
    iphone = session.products_view.get_product_by_id("1")
    session.products_view.add_to_cart(iphone, 1)

    order = session.orders_view.create_order("user123", shipping_address, payment_method)

    assert order is not None
    assert session.products_view.get_cart_item_count() == 0
    assert session.catalog.get_by_id("1").stock == 49


def test_unseeded_session_with_custom_pricing():
    session = open_storefront(seed=False, pricing=PricingRules(shipping_fee=10.0), latency=0)
    assert session.catalog.get_all() == []
    assert session.cart.get_shipping() == 10.0


def test_latency_from_environment(monkeypatch):
    monkeypatch.setenv("STOREFRONT_SIMULATED_LATENCY", "0.25")
    session = open_storefront(seed=False)
    assert session.products_view.latency == 0.25
    assert session.orders_view.latency == 0.25
