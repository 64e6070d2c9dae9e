"""Order ledger — checkout, order history and status changes.

Checkout reads the cart once, so the order's lines and amounts are exactly
what the shopper saw in that summary. The cart is cleared only after the
order has been stored; if anything fails before that, the cart is left as
it was. Reserved stock is not returned on checkout, it now belongs to the
order.
"""

from collections.abc import Iterable

import structlog
from protean.exceptions import InvalidDataError, ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.cart.ledger import CartLedger
from storefront.messages import EMPTY_CART, ORDER_NOT_FOUND, first_message
from storefront.order.order import Order, OrderStatus, coerce_status

logger = structlog.get_logger(__name__)


class OrderLedger:
    def __init__(self, cart: CartLedger, seed: Iterable[Order] | None = None):
        self.cart = cart
        self.failure_reason: str | None = None
        for order in seed or ():
            self._repository.add(order)

    @property
    def _repository(self):
        return current_domain.repository_for(Order)

    def _fail(self, reason: str, **context) -> bool:
        self.failure_reason = reason
        logger.warning("Order operation failed", reason=reason, **context)
        return False

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def create_order(self, customer_id, shipping_address, payment_method) -> Order | None:
        """Turn the current cart into a pending order and empty the cart.

        `shipping_address` and `payment_method` may be value objects or dicts
        of their fields.
        """
        self.failure_reason = None
        summary = self.cart.get_summary()
        if not summary.items:
            self._fail(EMPTY_CART, customer_id=str(customer_id))
            return None

        try:
            order = Order.create(
                customer_id=customer_id,
                lines=[
                    {
                        "product_id": item.product_id,
                        "product_name": item.product_name,
                        "unit_price": item.unit_price,
                        "quantity": item.quantity,
                    }
                    for item in summary.items
                ],
                pricing={
                    "subtotal": summary.subtotal,
                    "shipping": summary.shipping,
                    "tax": summary.tax,
                    "total": summary.total,
                },
                shipping_address=shipping_address,
                payment_method=payment_method,
            )
        except (ValidationError, InvalidDataError) as exc:
            # Unknown address or payment keys surface as InvalidDataError
            self._fail(first_message(exc), customer_id=str(customer_id))
            return None

        self._repository.add(order)
        self.cart.clear()

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(customer_id),
            items=summary.total_items,
            total=summary.total,
        )
        return order

    # -------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------
    def get_orders(self, customer_id) -> list[Order]:
        """The customer's orders, newest first."""
        orders = self._repository.for_customer(customer_id)
        return sorted(orders, key=lambda order: order.created_at, reverse=True)

    def get_order_by_id(self, order_id) -> Order | None:
        try:
            return self._repository.get(str(order_id))
        except ObjectNotFoundError:
            return None

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def update_order_status(self, order_id, status) -> bool:
        """Set the status as requested; no transition rules apply here."""
        self.failure_reason = None
        order = self.get_order_by_id(order_id)
        if order is None:
            return self._fail(ORDER_NOT_FOUND, order_id=str(order_id))

        try:
            order.update_status(status)
        except ValidationError as exc:
            return self._fail(first_message(exc), order_id=str(order_id), status=str(status))

        self._repository.add(order)
        logger.info("Order status updated", order_id=str(order_id), status=order.status)
        return True

    def cancel_order(self, order_id) -> bool:
        self.failure_reason = None
        order = self.get_order_by_id(order_id)
        if order is None:
            return self._fail(ORDER_NOT_FOUND, order_id=str(order_id))

        try:
            order.cancel()
        except ValidationError as exc:
            return self._fail(first_message(exc), order_id=str(order_id), status=order.status)

        self._repository.add(order)
        logger.info("Order cancelled", order_id=str(order_id))
        return True

    # -------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------
    def get_orders_by_status(self, customer_id, status) -> list[Order]:
        self.failure_reason = None
        try:
            wanted = coerce_status(status).value
        except ValidationError as exc:
            self._fail(first_message(exc), customer_id=str(customer_id), status=str(status))
            return []

        return [order for order in self.get_orders(customer_id) if order.status == wanted]

    def get_total_spent(self, customer_id) -> float:
        """Sum of order totals, ignoring cancelled orders."""
        return sum(
            order.pricing.total
            for order in self._repository.for_customer(customer_id)
            if order.status != OrderStatus.CANCELLED.value
        )

    def get_order_count(self, customer_id) -> int:
        return len(self._repository.for_customer(customer_id))

    def get_recent_orders(self, customer_id, limit: int = 5) -> list[Order]:
        return self.get_orders(customer_id)[:limit]
