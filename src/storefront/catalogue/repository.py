"""Repository for the Product aggregate."""

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    """Product storage. The provider (memory or SQL) comes from domain configuration."""

    def listing(self) -> list[Product]:
        """All products, in the order they were added."""
        return self._dao.query.all().items

    def in_category(self, category: str) -> list[Product]:
        return self._dao.query.filter(category=category).all().items
