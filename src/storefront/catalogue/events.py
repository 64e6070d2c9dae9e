"""Domain events for the Product aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Product")
class StockReserved:
    """Units of a product were set aside for a shopping cart."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining_stock = Integer(required=True)


@storefront.event(part_of="Product")
class StockReleased:
    """Previously reserved units of a product were returned to stock."""

    __version__ = "v1"

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    remaining_stock = Integer(required=True)
