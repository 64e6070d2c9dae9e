"""Product catalogue — lookups, filtered search and stock bookkeeping.

Every read goes through the Product repository, so callers always receive
freshly loaded objects: changing a returned product does not change the
catalogue. Failures are reported as data (False / None / empty list) with
the reason kept in `failure_reason`; nothing is raised to the caller.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.messages import PRODUCT_NOT_FOUND, first_message

logger = structlog.get_logger(__name__)


class SortField(Enum):
    NAME = "name"
    PRICE = "price"
    RATING = "rating"


class SortOrder(Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ProductFilter:
    """Search criteria. Every field is optional and criteria combine with AND."""

    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    search_term: str | None = None
    sort_by: SortField | str | None = None
    sort_order: SortOrder | str = SortOrder.ASC

    def __post_init__(self):
        if self.sort_by is not None:
            object.__setattr__(self, "sort_by", SortField(self.sort_by))
        object.__setattr__(self, "sort_order", SortOrder(self.sort_order or SortOrder.ASC))


def _sort(products: list[Product], field: SortField, order: SortOrder) -> list[Product]:
    """Stable sort on `field`; products without a value keep their order at the end."""
    ranked = [p for p in products if getattr(p, field.value) is not None]
    unranked = [p for p in products if getattr(p, field.value) is None]
    ranked.sort(key=lambda p: getattr(p, field.value), reverse=order == SortOrder.DESC)
    return ranked + unranked


class ProductCatalog:
    def __init__(self, seed: Iterable[Product] | None = None):
        self.failure_reason: str | None = None
        for product in seed or ():
            self.add(product)

    @property
    def _repository(self):
        return current_domain.repository_for(Product)

    def _fail(self, reason: str, **context) -> bool:
        self.failure_reason = reason
        logger.warning("Catalogue operation failed", reason=reason, **context)
        return False

    # -------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------
    def add(self, product: Product) -> Product:
        self._repository.add(product)
        return product

    def get_all(self) -> list[Product]:
        return list(self._repository.listing())

    def get_by_id(self, product_id) -> Product | None:
        try:
            return self._repository.get(str(product_id))
        except ObjectNotFoundError:
            return None

    def get_by_category(self, category: str) -> list[Product]:
        return list(self._repository.in_category(category))

    def get_categories(self) -> set[str]:
        return {product.category for product in self.get_all()}

    def search(self, criteria: ProductFilter | None = None) -> list[Product]:
        criteria = criteria or ProductFilter()
        products = self.get_all()

        if criteria.category:
            products = [p for p in products if p.category == criteria.category]

        if criteria.min_price is not None:
            products = [p for p in products if p.price >= criteria.min_price]

        if criteria.max_price is not None:
            products = [p for p in products if p.price <= criteria.max_price]

        if criteria.search_term:
            term = criteria.search_term.lower()
            products = [
                p for p in products if term in p.name.lower() or term in (p.description or "").lower()
            ]

        if criteria.sort_by is not None:
            products = _sort(products, criteria.sort_by, criteria.sort_order)

        return products

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def update_stock(self, product_id, quantity: int) -> bool:
        """Decrement stock by `quantity` if that many units are available."""
        self.failure_reason = None
        product = self.get_by_id(product_id)
        if product is None:
            return self._fail(PRODUCT_NOT_FOUND, product_id=str(product_id))

        try:
            product.reserve_stock(quantity)
        except ValidationError as exc:
            return self._fail(first_message(exc), product_id=str(product_id), quantity=quantity)

        self._repository.add(product)
        return True

    def restock(self, product_id, quantity: int) -> bool:
        """Return `quantity` reserved units to stock."""
        self.failure_reason = None
        product = self.get_by_id(product_id)
        if product is None:
            return self._fail(PRODUCT_NOT_FOUND, product_id=str(product_id))

        try:
            product.release_stock(quantity)
        except ValidationError as exc:
            return self._fail(first_message(exc), product_id=str(product_id), quantity=quantity)

        self._repository.add(product)
        return True
