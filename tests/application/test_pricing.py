"""Tests for cart pricing rules and their environment overrides."""

import pytest
from storefront.cart.pricing import PricingRules


class TestDefaults:
    def test_shipping_below_threshold(self):
        assert PricingRules().shipping_for(499.99) == 25.0

    def test_free_shipping_at_threshold(self):
        assert PricingRules().shipping_for(500.0) == 0.0

    def test_tax(self):
        assert PricingRules().tax_for(250.0) == pytest.approx(20.0)


class TestFromEnvironment:
    def test_defaults_without_variables(self, monkeypatch):
        monkeypatch.delenv("STOREFRONT_FREE_SHIPPING_THRESHOLD", raising=False)
        monkeypatch.delenv("STOREFRONT_SHIPPING_FEE", raising=False)
        monkeypatch.delenv("STOREFRONT_TAX_RATE", raising=False)
        assert PricingRules.from_env() == PricingRules()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("STOREFRONT_FREE_SHIPPING_THRESHOLD", "200")
        monkeypatch.setenv("STOREFRONT_SHIPPING_FEE", "15.5")
        monkeypatch.setenv("STOREFRONT_TAX_RATE", "0.1")
        rules = PricingRules.from_env()
        assert rules.free_shipping_threshold == 200.0
        assert rules.shipping_fee == 15.5
        assert rules.tax_rate == 0.1


class TestValidation:
    def test_negative_fee_is_rejected(self):
        with pytest.raises(ValueError):
            PricingRules(shipping_fee=-1.0)

    def test_tax_rate_must_be_a_fraction(self):
        with pytest.raises(ValueError):
            PricingRules(tax_rate=8.0)
