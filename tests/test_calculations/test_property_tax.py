"""Tests for property tax calculations."""

import pytest

from underwriting.calculations.property_tax import calculate_property_tax


class TestCalculatePropertyTax:
    """Tests for assessed value and mill rate tax."""

    def test_sample_tax(self):
        """Half of soft cost assessed at 20 mills."""
        tax = calculate_property_tax(25_000_000, 4_000_000, 7_500_000, 1.0, 1.0, 0.5, 20.0, 120)

        assert tax.assessed_value_hard == pytest.approx(25_000_000.0)
        assert tax.assessed_value_land == pytest.approx(4_000_000.0)
        assert tax.assessed_value_soft == pytest.approx(3_750_000.0)
        assert tax.assessed_value == pytest.approx(32_750_000.0)
        assert tax.property_tax == pytest.approx(655_000.0)
        assert tax.property_tax_per_unit == pytest.approx(655_000 / 120)

    def test_zero_mill_rate(self):
        """No mill rate means no tax."""
        tax = calculate_property_tax(25_000_000, 4_000_000, 7_500_000, 1.0, 1.0, 1.0, 0.0, 120)
        assert tax.assessed_value == pytest.approx(36_500_000.0)
        assert tax.property_tax == 0.0

    def test_tax_linear_in_mill_rate(self):
        """Doubling the mill rate doubles the tax."""
        low = calculate_property_tax(10_000_000, 0, 0, 1.0, 1.0, 1.0, 10.0, 10)
        high = calculate_property_tax(10_000_000, 0, 0, 1.0, 1.0, 1.0, 20.0, 10)
        assert high.property_tax == pytest.approx(2 * low.property_tax)

    def test_no_units(self):
        """Per-unit tax is zero without units."""
        tax = calculate_property_tax(0, 1_000_000, 0, 1.0, 1.0, 1.0, 15.0, 0)
        assert tax.property_tax == pytest.approx(15_000.0)
        assert tax.property_tax_per_unit == 0.0

    def test_idempotent(self):
        """Repeated calls with the same inputs give equal results."""
        args = (25_000_000, 4_000_000, 7_500_000, 1.0, 1.0, 0.5, 20.0, 120)
        assert calculate_property_tax(*args) == calculate_property_tax(*args)
