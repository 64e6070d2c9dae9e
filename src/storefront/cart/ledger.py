"""Line management and cart arithmetic for one persisted shopping cart.

Amounts are derived from the stored lines on every read; nothing is cached,
so a summary always matches the current lines. Stock is not checked here,
that is the caller's responsibility.
"""

from dataclasses import dataclass

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.cart.cart import CartItem, ShoppingCart
from storefront.cart.pricing import PricingRules
from storefront.messages import first_message

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartSummary:
    """A consistent read of the cart: lines plus every derived amount."""

    items: list[CartItem]
    total_items: int
    subtotal: float
    shipping: float
    tax: float
    total: float


def summarize(lines: list[CartItem], pricing: PricingRules) -> CartSummary:
    subtotal = sum(item.unit_price * item.quantity for item in lines)
    shipping = pricing.shipping_for(subtotal)
    tax = pricing.tax_for(subtotal)
    return CartSummary(
        items=list(lines),
        total_items=sum(item.quantity for item in lines),
        subtotal=subtotal,
        shipping=shipping,
        tax=tax,
        total=subtotal + shipping + tax,
    )


class CartLedger:
    def __init__(self, cart_id=None, customer_id=None, session_id=None, pricing: PricingRules | None = None):
        self.pricing = pricing or PricingRules.from_env()
        self.failure_reason: str | None = None

        if cart_id is None:
            cart = ShoppingCart.create(customer_id=customer_id, session_id=session_id)
            self._repository.add(cart)
            cart_id = cart.id
            logger.debug("Opened shopping cart", cart_id=str(cart_id), customer_id=customer_id)
        else:
            # Fail fast on an unknown cart
            self._repository.get(str(cart_id))

        self.cart_id = str(cart_id)

    @property
    def _repository(self):
        return current_domain.repository_for(ShoppingCart)

    def _load(self) -> ShoppingCart:
        return self._repository.get(self.cart_id)

    def _apply(self, change, **context) -> bool:
        """Run `change` against the stored cart and persist it, reporting rule violations as False."""
        self.failure_reason = None
        cart = self._load()
        try:
            change(cart)
        except ValidationError as exc:
            self.failure_reason = first_message(exc)
            logger.warning("Cart change rejected", cart_id=self.cart_id, reason=self.failure_reason, **context)
            return False

        self._repository.add(cart)
        return True

    # -------------------------------------------------------------------
    # Line management
    # -------------------------------------------------------------------
    def add_item(self, product, quantity: int = 1) -> bool:
        return self._apply(
            lambda cart: cart.add_item(
                product_id=str(product.id),
                product_name=product.name,
                unit_price=product.price,
                quantity=quantity,
            ),
            product_id=str(product.id),
            quantity=quantity,
        )

    def remove_item(self, product_id) -> bool:
        return self._apply(lambda cart: cart.remove_item(product_id), product_id=str(product_id))

    def update_quantity(self, product_id, quantity: int) -> bool:
        """Set a line's quantity (not additive). Zero or less removes the line."""
        return self._apply(
            lambda cart: cart.update_item_quantity(product_id, quantity),
            product_id=str(product_id),
            quantity=quantity,
        )

    def clear(self) -> None:
        cart = self._load()
        cart.clear()
        self._repository.add(cart)

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def get_items(self) -> list[CartItem]:
        return self._load().lines

    def is_empty(self) -> bool:
        return not self._load().items

    def has_item(self, product_id) -> bool:
        return self._load().item_for(product_id) is not None

    def get_item_quantity(self, product_id) -> int:
        item = self._load().item_for(product_id)
        return item.quantity if item else 0

    def get_item_count(self) -> int:
        return self.get_summary().total_items

    def get_subtotal(self) -> float:
        return self.get_summary().subtotal

    def get_shipping(self) -> float:
        return self.get_summary().shipping

    def get_tax(self) -> float:
        return self.get_summary().tax

    def get_total(self) -> float:
        return self.get_summary().total

    def get_summary(self) -> CartSummary:
        return summarize(self._load().lines, self.pricing)
