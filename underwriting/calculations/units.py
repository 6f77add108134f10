"""Unit mix calculations: per-row rents and aggregate area/revenue totals."""

from dataclasses import dataclass
from typing import Iterable, List

from ..models.lookups import RentInputMode, MONTHS_PER_YEAR
from ..models.one_pager import UnitMixRow
from .ratios import safe_divide


@dataclass(frozen=True)
class UnitMixRowCalc:
    """Derived values for a single unit mix row."""

    total_sf: float  # unit_count x avg_unit_sf
    effective_monthly_rent: float  # Per unit
    effective_rent_per_sf: float  # Monthly, per NRSF
    annual_rental_revenue: float


@dataclass(frozen=True)
class UnitMixAggregates:
    """Aggregate unit mix metrics across all active rows."""

    total_units: int
    total_nrsf: float
    total_gbsf: float
    weighted_avg_unit_sf: float
    weighted_avg_rent_per_sf: float  # Monthly
    gross_potential_rent: float  # Annual


def get_effective_monthly_rent(row: UnitMixRow) -> float:
    """Get monthly rent per unit according to the row's rent input mode."""
    if row.rent_input_mode == RentInputMode.PER_SF:
        return row.rent_per_sf * row.avg_unit_sf
    return row.rent_whole_dollar


def calculate_unit_mix_row(row: UnitMixRow) -> UnitMixRowCalc:
    """Calculate derived values for one unit mix row.

    Args:
        row: Unit mix row.

    Returns:
        UnitMixRowCalc with area, rent and annual revenue.

    Example:
        >>> calc = calculate_unit_mix_row(UnitMixRow("1BR", 10, 800, "per_sf", rent_per_sf=2.0))
        >>> calc.annual_rental_revenue
        192000.0
    """
    monthly_rent = get_effective_monthly_rent(row)

    return UnitMixRowCalc(
        total_sf=row.unit_count * row.avg_unit_sf,
        effective_monthly_rent=monthly_rent,
        effective_rent_per_sf=safe_divide(monthly_rent, row.avg_unit_sf),
        annual_rental_revenue=row.unit_count * monthly_rent * MONTHS_PER_YEAR,
    )


def get_active_rows(rows: Iterable[UnitMixRow]) -> List[UnitMixRow]:
    """Get rows with at least one unit, in sort order."""
    return sorted((r for r in rows if r.is_active), key=lambda r: r.sort_order)


def aggregate_unit_mix(
    rows: Iterable[UnitMixRow],
    efficiency_ratio: float,
) -> UnitMixAggregates:
    """Aggregate unit mix rows into project totals.

    Zero-count rows are skipped. Gross area is net area grossed up by the
    efficiency ratio; average rent/SF is revenue weighted, not row weighted.

    Args:
        rows: Unit mix rows (placeholders allowed).
        efficiency_ratio: NRSF / GBSF (e.g., 0.85).

    Returns:
        UnitMixAggregates with unit, area and rent totals.
    """
    active = get_active_rows(rows)
    row_calcs = [calculate_unit_mix_row(r) for r in active]

    total_units = sum(r.unit_count for r in active)
    total_nrsf = sum(c.total_sf for c in row_calcs)
    gross_potential_rent = sum(c.annual_rental_revenue for c in row_calcs)

    return UnitMixAggregates(
        total_units=total_units,
        total_nrsf=total_nrsf,
        total_gbsf=safe_divide(total_nrsf, efficiency_ratio),
        weighted_avg_unit_sf=safe_divide(total_nrsf, total_units),
        weighted_avg_rent_per_sf=safe_divide(gross_potential_rent, total_nrsf) / MONTHS_PER_YEAR,
        gross_potential_rent=gross_potential_rent,
    )


def get_total_units(rows: Iterable[UnitMixRow]) -> int:
    """Get total unit count from the active rows."""
    return sum(r.unit_count for r in rows if r.is_active)
