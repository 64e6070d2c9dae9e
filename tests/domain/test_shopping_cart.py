"""Tests for the ShoppingCart aggregate and its lines."""

import pytest
from protean.exceptions import ValidationError
from storefront.cart.cart import ShoppingCart
from storefront.cart.events import CartCleared, CartItemAdded, CartItemRemoved, CartQuantityUpdated


def _make_cart():
    return ShoppingCart.create(customer_id="user123")


class TestAddItem:
    def test_add_item(self):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2
        assert cart.items[0].product_name == "iPhone 15 Pro"

    def test_add_item_raises_event(self):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        events = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(events) == 1
        assert events[0].product_id == "1"
        assert events[0].line_quantity == 1

    def test_adding_same_product_grows_the_line(self):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_line_keeps_first_price_snapshot(self):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        cart.add_item("1", "iPhone 15 Pro", 7999.99, 1)
        assert cart.items[0].unit_price == pytest.approx(8999.99)

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_is_rejected(self, quantity):
        cart = _make_cart()
        with pytest.raises(ValidationError) as exc:
            cart.add_item("1", "iPhone 15 Pro", 8999.99, quantity)
        assert "Quantidade deve ser maior que zero" in exc.value.messages["quantity"]
        assert len(cart.items) == 0

    @pytest.mark.parametrize("quantity", [1.5, "1", True])
    def test_non_integer_quantity_is_rejected(self, quantity):
        cart = _make_cart()
        with pytest.raises(ValidationError) as exc:
            cart.add_item("1", "iPhone 15 Pro", 8999.99, quantity)
        assert "Quantidade deve ser maior que zero" in exc.value.messages["quantity"]
        assert len(cart.items) == 0

    def test_line_total(self):
        cart = _make_cart()
        cart.add_item("3", "Camiseta Nike Dri-FIT", 89.99, 3)
        assert cart.items[0].line_total == pytest.approx(269.97)


class TestUpdateQuantity:
    def test_update_sets_quantity(self):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        cart.update_item_quantity("1", 5)
        assert cart.items[0].quantity == 5

    def test_update_raises_event(self):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        cart._events.clear()
        cart.update_item_quantity("1", 3)
        assert len(cart._events) == 1
        event = cart._events[0]
        assert isinstance(event, CartQuantityUpdated)
        assert event.previous_quantity == 1
        assert event.new_quantity == 3

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_non_positive_quantity_removes_line(self, quantity):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        cart.update_item_quantity("1", quantity)
        assert len(cart.items) == 0

    def test_fractional_quantity_is_rejected(self):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        with pytest.raises(ValidationError):
            cart.update_item_quantity("1", 2.5)
        assert cart.items[0].quantity == 1

    def test_update_unknown_product(self):
        cart = _make_cart()
        with pytest.raises(ValidationError):
            cart.update_item_quantity("99", 2)


class TestRemoveAndClear:
    def test_remove_item(self):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        cart.add_item("3", "Camiseta Nike Dri-FIT", 89.99, 1)
        cart.remove_item("1")
        assert [item.product_id for item in cart.items] == ["3"]
        assert any(isinstance(e, CartItemRemoved) for e in cart._events)

    def test_remove_unknown_product(self):
        cart = _make_cart()
        with pytest.raises(ValidationError) as exc:
            cart.remove_item("99")
        assert "Produto não está no carrinho" in exc.value.messages["product_id"]

    def test_clear_removes_every_line(self):
        cart = _make_cart()
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        cart.add_item("3", "Camiseta Nike Dri-FIT", 89.99, 2)
        cart.clear()
        assert len(cart.items) == 0
        cleared = [e for e in cart._events if isinstance(e, CartCleared)]
        assert cleared[0].lines_removed == 2

    def test_clearing_empty_cart_raises_no_event(self):
        cart = _make_cart()
        cart.clear()
        assert not [e for e in cart._events if isinstance(e, CartCleared)]


class TestQueries:
    def test_lines_follow_insertion_order(self):
        cart = _make_cart()
        cart.add_item("3", "Camiseta Nike Dri-FIT", 89.99, 1)
        cart.add_item("1", "iPhone 15 Pro", 8999.99, 1)
        assert [item.product_id for item in cart.lines] == ["3", "1"]

    def test_item_for(self):
        cart = _make_cart()
        cart.add_item("3", "Camiseta Nike Dri-FIT", 89.99, 1)
        assert cart.item_for("3") is not None
        assert cart.item_for(3) is not None
        assert cart.item_for("1") is None

    def test_guest_cart(self):
        cart = ShoppingCart.create(session_id="sess-001")
        assert cart.customer_id is None
        assert cart.session_id == "sess-001"
