"""Checkout and order history as the order screens see them."""

from datetime import datetime

from storefront.messages import (
    CREATE_ORDER_FAILED,
    LOAD_ORDER_FAILED,
    LOAD_ORDERS_FAILED,
    UPDATE_ORDER_STATUS_FAILED,
)
from storefront.order.ledger import OrderLedger
from storefront.order.order import Order, OrderStatus
from storefront.viewmodels.base import ViewModel, boundary

_STATUS_LABELS = {
    OrderStatus.PENDING.value: "Pendente",
    OrderStatus.PROCESSING.value: "Processando",
    OrderStatus.SHIPPED.value: "Enviado",
    OrderStatus.DELIVERED.value: "Entregue",
    OrderStatus.CANCELLED.value: "Cancelado",
}


class OrderViewModel(ViewModel):
    def __init__(self, orders: OrderLedger, latency: float | None = None):
        super().__init__(latency)
        self.orders = orders

    @property
    def cart(self):
        return self.orders.cart

    # -------------------------------------------------------------------
    # Checkout and history
    # -------------------------------------------------------------------
    @boundary(CREATE_ORDER_FAILED, loading=True)
    def create_order(self, customer_id, shipping_address, payment_method) -> Order | None:
        order = self.orders.create_order(customer_id, shipping_address, payment_method)
        if order is None:
            self.error = self.orders.failure_reason
        return order

    @boundary(LOAD_ORDERS_FAILED, default=list, loading=True)
    def get_orders(self, customer_id) -> list[Order]:
        return self.orders.get_orders(customer_id)

    @boundary(LOAD_ORDER_FAILED, loading=True)
    def get_order_by_id(self, order_id) -> Order | None:
        return self.orders.get_order_by_id(order_id)

    @boundary(UPDATE_ORDER_STATUS_FAILED, default=False, loading=True)
    def update_order_status(self, order_id, status) -> bool:
        if not self.orders.update_order_status(order_id, status):
            self.error = self.orders.failure_reason
            return False
        return True

    @boundary(UPDATE_ORDER_STATUS_FAILED, default=False, loading=True)
    def cancel_order(self, order_id) -> bool:
        if not self.orders.cancel_order(order_id):
            self.error = self.orders.failure_reason
            return False
        return True

    # -------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------
    @boundary(LOAD_ORDERS_FAILED, default=list)
    def get_orders_by_status(self, customer_id, status) -> list[Order]:
        orders = self.orders.get_orders_by_status(customer_id, status)
        if self.orders.failure_reason:
            self.error = self.orders.failure_reason
        return orders

    @boundary(LOAD_ORDERS_FAILED, default=0.0)
    def get_total_spent(self, customer_id) -> float:
        return self.orders.get_total_spent(customer_id)

    @boundary(LOAD_ORDERS_FAILED, default=0)
    def get_order_count(self, customer_id) -> int:
        return self.orders.get_order_count(customer_id)

    @boundary(LOAD_ORDERS_FAILED, default=list)
    def get_recent_orders(self, customer_id, limit: int = 5) -> list[Order]:
        return self.orders.get_recent_orders(customer_id, limit)

    # -------------------------------------------------------------------
    # Presentation helpers
    # -------------------------------------------------------------------
    def format_order_status(self, status) -> str:
        value = status.value if isinstance(status, OrderStatus) else status
        return _STATUS_LABELS.get(value, value)

    def format_order_date(self, date: datetime) -> str:
        return date.strftime("%d/%m/%Y")

    def can_cancel_order(self, order: Order) -> bool:
        return order.can_cancel

    def get_estimated_delivery(self, order: Order) -> datetime:
        return order.estimated_delivery
