"""Order aggregate — an immutable record of a checked-out cart.

Lines and pricing are copied from the cart when the order is placed and
never recalculated, so later catalogue or cart changes do not alter
historical orders. After creation only the status changes.

Statuses:
    PENDING → PROCESSING → SHIPPED → DELIVERED
    CANCELLED (from PENDING or PROCESSING)

Only cancellation checks where the order currently is: shipped and
delivered orders cannot be cancelled. General status updates are applied
as requested.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum
from uuid import uuid4

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from storefront.domain import storefront
from storefront.messages import ORDER_ALREADY_SHIPPED, UNKNOWN_ORDER_STATUS
from storefront.order.events import OrderCancelled, OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentType(Enum):
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    PIX = "pix"
    BOLETO = "boleto"


_CANCELLABLE_STATES = {OrderStatus.PENDING, OrderStatus.PROCESSING}
_DISPATCHED_STATES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}

FREE_SHIPPING_DELIVERY_DAYS = 3
STANDARD_DELIVERY_DAYS = 7


def generate_order_id(now: datetime) -> str:
    """Time-based order number with a random suffix."""
    return f"ORD-{int(now.timestamp() * 1000)}-{uuid4().hex[:9].upper()}"


def coerce_status(status) -> OrderStatus:
    try:
        return OrderStatus(status)
    except ValueError:
        raise ValidationError({"status": [UNKNOWN_ORDER_STATUS.format(status=status)]}) from None


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Delivery address captured at checkout."""

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)


@storefront.value_object(part_of="Order")
class PaymentMethod:
    method_type = String(required=True, max_length=20, choices=PaymentType)
    details = String(max_length=100)  # Masked card number, "PIX", etc.


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Amounts frozen at checkout."""

    subtotal = Float(default=0.0, min_value=0.0)
    shipping = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    total = Float(default=0.0, min_value=0.0)

    @invariant.post
    def total_must_add_up(self):
        if abs(self.total - (self.subtotal + self.shipping + self.tax)) > 0.01:
            raise ValidationError({"total": ["Total must equal subtotal + shipping + tax"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """Snapshot of one cart line at checkout."""

    product_id = Identifier(required=True)
    product_name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    line_total = Float(required=True, min_value=0.0)


def _as_value_object(vo_cls, value):
    return value if isinstance(value, vo_cls) else vo_cls(**value)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    items = HasMany(OrderItem)
    pricing = ValueObject(OrderPricing)
    shipping_address = ValueObject(ShippingAddress)
    payment_method = ValueObject(PaymentMethod)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        customer_id,
        lines,
        pricing,
        shipping_address,
        payment_method,
        order_id=None,
        placed_at=None,
    ):
        """Place a new pending order.

        Args:
            customer_id: The customer placing the order.
            lines: Dicts with product_id, product_name, unit_price, quantity.
            pricing: OrderPricing, or a dict with subtotal, shipping, tax, total.
            shipping_address: ShippingAddress, or a dict with street, city,
                state, zip_code, country.
            payment_method: PaymentMethod, or a dict with method_type, details.
            order_id: Explicit order number; generated when omitted.
            placed_at: Creation time; now when omitted.
        """
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = placed_at or datetime.now(UTC)
        order = cls(
            id=order_id or generate_order_id(now),
            customer_id=str(customer_id),
            status=OrderStatus.PENDING.value,
            pricing=_as_value_object(OrderPricing, pricing),
            shipping_address=_as_value_object(ShippingAddress, shipping_address),
            payment_method=_as_value_object(PaymentMethod, payment_method),
            created_at=now,
            updated_at=now,
        )

        for line in lines:
            order.add_items(
                OrderItem(
                    product_id=str(line["product_id"]),
                    product_name=line["product_name"],
                    unit_price=line["unit_price"],
                    quantity=line["quantity"],
                    line_total=line["unit_price"] * line["quantity"],
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                item_count=sum(line["quantity"] for line in lines),
                total=order.pricing.total,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def can_cancel(self) -> bool:
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    @property
    def estimated_delivery(self) -> datetime:
        # Free-shipping orders go out with the faster carrier
        days = FREE_SHIPPING_DELIVERY_DAYS if self.pricing.shipping == 0 else STANDARD_DELIVERY_DAYS
        return self.created_at + timedelta(days=days)

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def update_status(self, status):
        """Move the order to `status` (an OrderStatus or its value)."""
        target = coerce_status(status)
        previous = self.status
        now = datetime.now(UTC)

        self.status = target.value
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
            )
        )

    def cancel(self):
        """Cancel the order. Cancelling twice is a no-op."""
        if self.status == OrderStatus.CANCELLED.value:
            return
        if OrderStatus(self.status) in _DISPATCHED_STATES:
            raise ValidationError({"status": [ORDER_ALREADY_SHIPPED]})

        self.update_status(OrderStatus.CANCELLED)

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                customer_id=str(self.customer_id),
                total=self.pricing.total,
                cancelled_at=self.updated_at,
            )
        )
