"""Shipping fee, free-shipping threshold and tax rate applied to cart subtotals."""

import os
from dataclasses import dataclass

DEFAULT_FREE_SHIPPING_THRESHOLD = 500.0
DEFAULT_SHIPPING_FEE = 25.0
DEFAULT_TAX_RATE = 0.08


@dataclass(frozen=True)
class PricingRules:
    free_shipping_threshold: float = DEFAULT_FREE_SHIPPING_THRESHOLD
    shipping_fee: float = DEFAULT_SHIPPING_FEE
    tax_rate: float = DEFAULT_TAX_RATE

    def __post_init__(self):
        if self.free_shipping_threshold < 0 or self.shipping_fee < 0:
            raise ValueError("Shipping threshold and fee must not be negative")
        if not 0 <= self.tax_rate < 1:
            raise ValueError(f"Tax rate must be a fraction between 0 and 1, got {self.tax_rate}")

    @classmethod
    def from_env(cls) -> "PricingRules":
        """Rules from STOREFRONT_* environment variables, falling back to the defaults."""
        return cls(
            free_shipping_threshold=float(
                os.environ.get("STOREFRONT_FREE_SHIPPING_THRESHOLD", DEFAULT_FREE_SHIPPING_THRESHOLD)
            ),
            shipping_fee=float(os.environ.get("STOREFRONT_SHIPPING_FEE", DEFAULT_SHIPPING_FEE)),
            tax_rate=float(os.environ.get("STOREFRONT_TAX_RATE", DEFAULT_TAX_RATE)),
        )

    def shipping_for(self, subtotal: float) -> float:
        # Free at or above the threshold
        return 0.0 if subtotal >= self.free_shipping_threshold else self.shipping_fee

    def tax_for(self, subtotal: float) -> float:
        return subtotal * self.tax_rate
