"""Product view model — catalogue browsing plus the cart, as a screen sees them.

Putting a product in the cart reserves its stock right away; taking it out
of the cart (removal, a lower quantity, or clearing) returns the stock. A
cart line and its reservation always change together: when the line cannot
be written, the reservation is undone.
"""

from dataclasses import dataclass

from storefront.cart.ledger import CartLedger, CartSummary
from storefront.catalogue.catalog import ProductCatalog, ProductFilter
from storefront.catalogue.product import LOW_STOCK_THRESHOLD, Product
from storefront.messages import (
    ADD_TO_CART_FAILED,
    CART_ITEM_NOT_FOUND,
    INSUFFICIENT_STOCK,
    INVALID_QUANTITY,
    LOAD_CART_FAILED,
    LOAD_PRODUCT_FAILED,
    LOAD_PRODUCTS_FAILED,
    PRODUCT_NOT_FOUND,
    PRODUCT_UNAVAILABLE,
    REMOVE_FROM_CART_FAILED,
    SEARCH_PRODUCTS_FAILED,
    UPDATE_QUANTITY_FAILED,
)
from storefront.viewmodels.base import ViewModel, boundary


@dataclass(frozen=True)
class AddToCartValidation:
    is_valid: bool
    message: str | None = None


class ProductViewModel(ViewModel):
    def __init__(self, catalog: ProductCatalog, cart: CartLedger, latency: float | None = None):
        super().__init__(latency)
        self.catalog = catalog
        self.cart = cart
        self.current_filter = ProductFilter()

    # -------------------------------------------------------------------
    # Catalogue
    # -------------------------------------------------------------------
    @boundary(LOAD_PRODUCTS_FAILED, default=list, loading=True)
    def load_products(self) -> list[Product]:
        return self.catalog.get_all()

    @boundary(SEARCH_PRODUCTS_FAILED, default=list, loading=True)
    def search_products(self, criteria: ProductFilter | dict | None = None) -> list[Product]:
        if isinstance(criteria, dict):
            criteria = ProductFilter(**criteria)
        self.current_filter = criteria or ProductFilter()
        return self.catalog.search(self.current_filter)

    @boundary(LOAD_PRODUCT_FAILED, loading=True)
    def get_product_by_id(self, product_id) -> Product | None:
        return self.catalog.get_by_id(product_id)

    @boundary(LOAD_PRODUCTS_FAILED, default=list)
    def get_categories(self) -> list[str]:
        return sorted(self.catalog.get_categories())

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def validate_add_to_cart(self, product: Product, quantity: int) -> AddToCartValidation:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            return AddToCartValidation(False, INVALID_QUANTITY)
        if not product.is_available:
            return AddToCartValidation(False, PRODUCT_UNAVAILABLE)
        if quantity > product.stock:
            return AddToCartValidation(False, INSUFFICIENT_STOCK.format(available=product.stock))
        return AddToCartValidation(True)

    @boundary(ADD_TO_CART_FAILED, default=False)
    def add_to_cart(self, product: Product, quantity: int = 1) -> bool:
        # The caller's copy may be stale, validate against stored stock
        current = self.catalog.get_by_id(product.id)
        if current is None:
            self.error = PRODUCT_NOT_FOUND
            return False

        validation = self.validate_add_to_cart(current, quantity)
        if not validation.is_valid:
            self.error = validation.message
            return False

        if not self.catalog.update_stock(current.id, quantity):
            self.error = self.catalog.failure_reason
            return False

        added = False
        try:
            added = self.cart.add_item(current, quantity)
        finally:
            if not added:
                self.catalog.restock(current.id, quantity)

        if not added:
            self.error = self.cart.failure_reason
        return added

    @boundary(REMOVE_FROM_CART_FAILED, default=False)
    def remove_from_cart(self, product_id) -> bool:
        reserved = self.cart.get_item_quantity(product_id)
        if not self.cart.remove_item(product_id):
            self.error = self.cart.failure_reason
            return False

        self.catalog.restock(product_id, reserved)
        return True

    @boundary(UPDATE_QUANTITY_FAILED, default=False)
    def update_cart_quantity(self, product_id, quantity: int) -> bool:
        """Set the line to `quantity`, reserving or returning the difference. Zero or less removes it."""
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            self.error = INVALID_QUANTITY
            return False
        if quantity <= 0:
            return self.remove_from_cart(product_id)

        current = self.cart.get_item_quantity(product_id)
        if current == 0:
            self.error = CART_ITEM_NOT_FOUND
            return False

        delta = quantity - current
        if delta > 0 and not self.catalog.update_stock(product_id, delta):
            self.error = self.catalog.failure_reason
            return False

        updated = False
        try:
            updated = self.cart.update_quantity(product_id, quantity)
        finally:
            if not updated and delta > 0:
                self.catalog.restock(product_id, delta)

        if not updated:
            self.error = self.cart.failure_reason
            return False

        if delta < 0:
            self.catalog.restock(product_id, -delta)
        return True

    @boundary(REMOVE_FROM_CART_FAILED)
    def clear_cart(self) -> None:
        lines = self.cart.get_items()
        self.cart.clear()
        for item in lines:
            self.catalog.restock(item.product_id, item.quantity)

    @boundary(LOAD_CART_FAILED)
    def get_cart_summary(self) -> CartSummary | None:
        return self.cart.get_summary()

    @boundary(LOAD_CART_FAILED, default=0)
    def get_cart_item_count(self) -> int:
        return self.cart.get_item_count()

    @boundary(LOAD_CART_FAILED, default=False)
    def is_product_in_cart(self, product_id) -> bool:
        return self.cart.has_item(product_id)

    @boundary(LOAD_CART_FAILED, default=0)
    def get_product_cart_quantity(self, product_id) -> int:
        return self.cart.get_item_quantity(product_id)

    # -------------------------------------------------------------------
    # Presentation helpers
    # -------------------------------------------------------------------
    def format_price(self, price: float) -> str:
        return f"R$ {price:.2f}".replace(".", ",")

    def format_rating(self, rating: float) -> str:
        return f"{rating:.1f} ⭐"

    def is_product_available(self, product: Product) -> bool:
        return product.is_available

    def get_stock_status(self, product: Product) -> str:
        return product.stock_status.value

    # -------------------------------------------------------------------
    # Analytics
    # -------------------------------------------------------------------
    @boundary(LOAD_PRODUCTS_FAILED, default=list)
    def get_popular_products(self, limit: int = 5) -> list[Product]:
        """Most reviewed products first."""
        products = sorted(self.catalog.get_all(), key=lambda p: p.reviews or 0, reverse=True)
        return products[:limit]

    @boundary(LOAD_PRODUCTS_FAILED, default=list)
    def get_high_rated_products(self, min_rating: float = 4.5) -> list[Product]:
        products = [p for p in self.catalog.get_all() if (p.rating or 0) >= min_rating]
        return sorted(products, key=lambda p: p.rating, reverse=True)

    @boundary(LOAD_PRODUCTS_FAILED, default=list)
    def get_low_stock_products(self, threshold: int = LOW_STOCK_THRESHOLD) -> list[Product]:
        """In-stock products below `threshold` units, scarcest first."""
        products = [p for p in self.catalog.get_all() if 0 < p.stock < threshold]
        return sorted(products, key=lambda p: p.stock)
