"""Product aggregate — a catalogue entry together with its sellable stock.

Stock is reserved eagerly when a product goes into a cart and released when
the line leaves the cart without being ordered. Stock can never go negative:
a reservation that exceeds the available units is rejected before anything
is changed.
"""

from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Float, Integer, String, Text

from storefront.catalogue.events import StockReleased, StockReserved
from storefront.domain import storefront
from storefront.messages import INSUFFICIENT_STOCK, INVALID_QUANTITY

LOW_STOCK_THRESHOLD = 10


def _require_whole_units(quantity):
    # Whole units only; Integer fields would round a fraction
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError({"quantity": [INVALID_QUANTITY]})


class StockStatus(Enum):
    SOLD_OUT = "Esgotado"
    LOW = "Últimas unidades"
    AVAILABLE = "Disponível"


@storefront.aggregate
class Product:
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    description = Text()
    image_url = String(max_length=1024)
    category = String(required=True, max_length=100)
    stock = Integer(default=0, min_value=0)
    rating = Float(min_value=0.0, max_value=5.0)
    reviews = Integer(default=0, min_value=0)

    @property
    def is_available(self) -> bool:
        return self.stock > 0

    @property
    def stock_status(self) -> StockStatus:
        if self.stock == 0:
            return StockStatus.SOLD_OUT
        if self.stock < LOW_STOCK_THRESHOLD:
            return StockStatus.LOW
        return StockStatus.AVAILABLE

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def reserve_stock(self, quantity):
        """Take `quantity` units out of stock. Zero is accepted and changes nothing."""
        _require_whole_units(quantity)
        if quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})
        if quantity > self.stock:
            raise ValidationError({"stock": [INSUFFICIENT_STOCK.format(available=self.stock)]})
        if quantity == 0:
            return

        self.stock -= quantity

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                quantity=quantity,
                remaining_stock=self.stock,
            )
        )

    def release_stock(self, quantity):
        """Put `quantity` previously reserved units back into stock."""
        _require_whole_units(quantity)
        if quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})
        if quantity == 0:
            return

        self.stock += quantity

        self.raise_(
            StockReleased(
                product_id=str(self.id),
                quantity=quantity,
                remaining_stock=self.stock,
            )
        )
