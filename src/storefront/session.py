"""Composition root: wire a catalogue, one cart and the order ledger for a shopper.

Must be called inside an active domain context (`storefront.domain_context()`).
"""

from dataclasses import dataclass

import structlog

from storefront.cart.ledger import CartLedger
from storefront.cart.pricing import PricingRules
from storefront.catalogue.catalog import ProductCatalog
from storefront.catalogue.seed import default_products
from storefront.order.ledger import OrderLedger
from storefront.order.seed import demo_orders
from storefront.utils.logging import bind_shopper
from storefront.viewmodels.order import OrderViewModel
from storefront.viewmodels.product import ProductViewModel

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Storefront:
    catalog: ProductCatalog
    cart: CartLedger
    orders: OrderLedger
    products_view: ProductViewModel
    orders_view: OrderViewModel


def open_storefront(
    customer_id=None,
    seed: bool = True,
    pricing: PricingRules | None = None,
    latency: float | None = None,
) -> Storefront:
    """Build the ledgers and view models, sharing one cart between them.

    With `seed` the demo catalogue and the demo order history are loaded.
    """
    catalog = ProductCatalog(seed=default_products() if seed else None)
    cart = CartLedger(customer_id=customer_id, pricing=pricing)
    orders = OrderLedger(cart, seed=demo_orders() if seed else None)

    bind_shopper(customer_id, cart.cart_id)
    logger.info("Storefront session opened", seeded=seed)

    return Storefront(
        catalog=catalog,
        cart=cart,
        orders=orders,
        products_view=ProductViewModel(catalog, cart, latency=latency),
        orders_view=OrderViewModel(orders, latency=latency),
    )
