"""Historical orders for the demo customer."""

from datetime import UTC, datetime

from storefront.order.order import Order, OrderStatus

DEMO_CUSTOMER_ID = "user123"

_HOME_ADDRESS = {
    "street": "Rua das Flores, 123",
    "city": "São Paulo",
    "state": "SP",
    "zip_code": "01234-567",
    "country": "Brasil",
}


def _historical(status: OrderStatus, updated_at: datetime, **kwargs) -> Order:
    order = Order.create(**kwargs)
    order.status = status.value
    order.updated_at = updated_at
    return order


def demo_orders() -> list[Order]:
    return [
        _historical(
            OrderStatus.DELIVERED,
            datetime(2024, 1, 20, tzinfo=UTC),
            order_id="ORD-1001",
            customer_id=DEMO_CUSTOMER_ID,
            lines=[
                {"product_id": "1", "product_name": "iPhone 15 Pro", "unit_price": 8999.99, "quantity": 1},
            ],
            pricing={"subtotal": 8999.99, "shipping": 0.0, "tax": 719.99, "total": 9719.98},
            shipping_address=_HOME_ADDRESS,
            payment_method={"method_type": "credit_card", "details": "**** 1234"},
            placed_at=datetime(2024, 1, 15, tzinfo=UTC),
        ),
        _historical(
            OrderStatus.SHIPPED,
            datetime(2024, 1, 22, tzinfo=UTC),
            order_id="ORD-1002",
            customer_id=DEMO_CUSTOMER_ID,
            lines=[
                {"product_id": "6", "product_name": "AirPods Pro 2ª Geração", "unit_price": 1999.99, "quantity": 1},
                {"product_id": "3", "product_name": "Camiseta Nike Dri-FIT", "unit_price": 89.99, "quantity": 1},
            ],
            pricing={"subtotal": 2089.98, "shipping": 0.0, "tax": 167.20, "total": 2257.18},
            shipping_address=_HOME_ADDRESS,
            payment_method={"method_type": "pix", "details": "PIX"},
            placed_at=datetime(2024, 1, 20, tzinfo=UTC),
        ),
    ]
