"""Development budget calculations: hard, soft and land cost."""

from dataclasses import dataclass
from typing import Iterable

from ..models.one_pager import SoftCostDetailRow
from .ratios import safe_divide


@dataclass(frozen=True)
class BudgetResult:
    """Results of the development budget calculation."""

    hard_cost: float
    hard_cost_per_gbsf: float
    soft_cost: float
    soft_cost_pct_display: float  # Soft cost as % of hard cost, either mode
    land_cost: float
    total_budget: float
    cost_per_unit: float
    cost_per_nrsf: float
    cost_per_gbsf: float
    land_cost_per_unit: float
    land_cost_per_sf: float  # Per SF of site area


def calculate_soft_cost(
    hard_cost: float,
    soft_cost_pct: float,
    use_detailed_soft_costs: bool,
    soft_cost_details: Iterable[SoftCostDetailRow],
) -> float:
    """Calculate soft cost using exactly one of the two modes.

    Detailed mode sums the line items and ignores the percentage; percent
    mode ignores the line items.
    """
    if use_detailed_soft_costs:
        return sum(d.amount for d in soft_cost_details)
    return soft_cost_pct * hard_cost


def calculate_budget(
    hard_cost_per_nrsf: float,
    total_nrsf: float,
    total_gbsf: float,
    land_cost: float,
    soft_cost_pct: float,
    use_detailed_soft_costs: bool,
    soft_cost_details: Iterable[SoftCostDetailRow],
    total_units: int,
    site_area_sf: float,
) -> BudgetResult:
    """Calculate the total development budget.

    Budget = Hard Cost + Land + Soft Cost

    Args:
        hard_cost_per_nrsf: Hard cost per net rentable SF.
        total_nrsf: Total net rentable SF.
        total_gbsf: Total gross building SF.
        land_cost: Land cost (lump sum).
        soft_cost_pct: Soft cost as % of hard cost (percent mode).
        use_detailed_soft_costs: Use itemized soft costs instead of the %.
        soft_cost_details: Itemized soft cost lines (detailed mode).
        total_units: Number of units.
        site_area_sf: Site area in SF (0 if unknown).

    Returns:
        BudgetResult with components and per-unit/per-SF normalizations.

    Example:
        >>> result = calculate_budget(250, 100_000, 117_647, 4_000_000, 0.30, False, [], 120, 130_680)
        >>> result.total_budget
        36500000.0
    """
    hard_cost = hard_cost_per_nrsf * total_nrsf
    soft_cost = calculate_soft_cost(hard_cost, soft_cost_pct, use_detailed_soft_costs, soft_cost_details)

    if use_detailed_soft_costs:
        soft_cost_pct_display = safe_divide(soft_cost, hard_cost)
    else:
        soft_cost_pct_display = soft_cost_pct

    total_budget = hard_cost + land_cost + soft_cost

    return BudgetResult(
        hard_cost=hard_cost,
        hard_cost_per_gbsf=safe_divide(hard_cost, total_gbsf),
        soft_cost=soft_cost,
        soft_cost_pct_display=soft_cost_pct_display,
        land_cost=land_cost,
        total_budget=total_budget,
        cost_per_unit=safe_divide(total_budget, total_units),
        cost_per_nrsf=safe_divide(total_budget, total_nrsf),
        cost_per_gbsf=safe_divide(total_budget, total_gbsf),
        land_cost_per_unit=safe_divide(land_cost, total_units),
        land_cost_per_sf=safe_divide(land_cost, site_area_sf),
    )
