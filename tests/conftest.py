import os
from pathlib import Path

import pytest
import structlog


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)


@pytest.fixture(scope="session")
def _storefront_domain(request):
    """Initialize the storefront domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    structlog.contextvars.clear_contextvars()
    ctx.pop()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
@pytest.fixture()
def pricing():
    from storefront.cart.pricing import PricingRules

    return PricingRules()


@pytest.fixture()
def catalog():
    from storefront.catalogue.catalog import ProductCatalog
    from storefront.catalogue.seed import default_products

    return ProductCatalog(seed=default_products())


@pytest.fixture()
def cart(pricing):
    from storefront.cart.ledger import CartLedger

    return CartLedger(customer_id="user123", pricing=pricing)


@pytest.fixture()
def orders(cart):
    from storefront.order.ledger import OrderLedger
    from storefront.order.seed import demo_orders

    return OrderLedger(cart, seed=demo_orders())


@pytest.fixture()
def products_view(catalog, cart):
    from storefront.viewmodels.product import ProductViewModel

    return ProductViewModel(catalog, cart, latency=0)


@pytest.fixture()
def orders_view(orders):
    from storefront.viewmodels.order import OrderViewModel

    return OrderViewModel(orders, latency=0)


@pytest.fixture()
def shipping_address():
    return {
        "street": "Rua das Flores, 123",
        "city": "São Paulo",
        "state": "SP",
        "zip_code": "01234-567",
        "country": "Brasil",
    }


@pytest.fixture()
def payment_method():
    return {"method_type": "credit_card", "details": "**** 1234"}
