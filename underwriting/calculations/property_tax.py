"""Property tax from assessed cost components and a mill rate."""

from dataclasses import dataclass

from ..models.lookups import MILL_RATE_BASIS
from .ratios import safe_divide


@dataclass(frozen=True)
class PropertyTaxResult:
    """Results of the stabilized property tax calculation."""

    assessed_value_hard: float
    assessed_value_land: float
    assessed_value_soft: float
    assessed_value: float
    property_tax: float  # Annual
    property_tax_per_unit: float


def calculate_property_tax(
    hard_cost: float,
    land_cost: float,
    soft_cost: float,
    tax_assessed_pct_hard: float,
    tax_assessed_pct_land: float,
    tax_assessed_pct_soft: float,
    tax_mil_rate: float,
    total_units: int,
) -> PropertyTaxResult:
    """Calculate annual property tax.

    Assessed value is a weighted sum of the budget components; tax is the
    mill rate per $1,000 of assessed value. Must run before operating
    expenses, which carry the tax as a line item.

    Args:
        hard_cost: Total hard cost.
        land_cost: Land cost.
        soft_cost: Total soft cost.
        tax_assessed_pct_hard: Share of hard cost assessed (0-1).
        tax_assessed_pct_land: Share of land cost assessed (0-1).
        tax_assessed_pct_soft: Share of soft cost assessed (0-1).
        tax_mil_rate: Tax per $1,000 of assessed value.
        total_units: Number of units.

    Returns:
        PropertyTaxResult with assessed value components and annual tax.

    Example:
        >>> result = calculate_property_tax(25_000_000, 4_000_000, 7_500_000, 1.0, 1.0, 0.5, 20.0, 120)
        >>> result.property_tax
        655000.0
    """
    assessed_value_hard = tax_assessed_pct_hard * hard_cost
    assessed_value_land = tax_assessed_pct_land * land_cost
    assessed_value_soft = tax_assessed_pct_soft * soft_cost
    assessed_value = assessed_value_hard + assessed_value_land + assessed_value_soft

    property_tax = assessed_value * tax_mil_rate / MILL_RATE_BASIS

    return PropertyTaxResult(
        assessed_value_hard=assessed_value_hard,
        assessed_value_land=assessed_value_land,
        assessed_value_soft=assessed_value_soft,
        assessed_value=assessed_value,
        property_tax=property_tax,
        property_tax_per_unit=safe_divide(property_tax, total_units),
    )
