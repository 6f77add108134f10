"""Unified calculation engine: one call from assumptions to returns.

Stages run in a fixed order, each a pure function of its explicit inputs:

    unit mix -> revenue -> budget -> property tax -> opex -> returns

Property tax precedes opex because opex carries the tax as a line item.
Nothing is cached; calculate_all() is cheap enough to call on every edit.
"""

import logging
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, Tuple

from ..models.lookups import SF_PER_ACRE
from ..models.one_pager import OnePager, UnitMixRow, PayrollRow, SoftCostDetailRow
from .units import aggregate_unit_mix
from .revenue import calculate_revenue
from .costs import calculate_budget
from .property_tax import calculate_property_tax
from .opex import calculate_opex
from .metrics import calculate_returns
from .ratios import safe_divide

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationInput:
    """Everything calculate_all() reads for one evaluation."""

    one_pager: OnePager
    unit_mix: Tuple[UnitMixRow, ...] = field(default_factory=tuple)
    payroll: Tuple[PayrollRow, ...] = field(default_factory=tuple)
    soft_cost_details: Tuple[SoftCostDetailRow, ...] = field(default_factory=tuple)
    site_area_sf: float = 0.0  # From the owning pursuit
    product_type_density_low: float = 0.0  # Units per acre
    product_type_density_high: float = 0.0

    def __post_init__(self) -> None:
        for name in ("unit_mix", "payroll", "soft_cost_details"):
            object.__setattr__(self, name, tuple(getattr(self, name)))


@dataclass(frozen=True)
class CalculationResults:
    """Flat record of every derived one-pager value.

    All values are annual where a period applies.
    """

    # === Site & Density ===
    site_area_acres: float
    density_units_per_acre: float
    recommended_units_low: float
    recommended_units_high: float

    # === Unit Mix ===
    total_units: int
    total_nrsf: float
    total_gbsf: float
    weighted_avg_unit_sf: float
    weighted_avg_rent_per_sf: float

    # === Revenue ===
    gross_potential_rent: float
    other_income: float
    gross_potential_revenue: float
    vacancy_loss: float
    net_revenue: float

    # === Budget ===
    hard_cost: float
    hard_cost_per_gbsf: float
    soft_cost: float
    soft_cost_pct_display: float
    land_cost: float
    total_budget: float
    cost_per_unit: float
    cost_per_nrsf: float
    cost_per_gbsf: float
    land_cost_per_unit: float
    land_cost_per_sf: float

    # === Property Tax ===
    assessed_value_hard: float
    assessed_value_land: float
    assessed_value_soft: float
    assessed_value: float
    property_tax_total: float
    property_tax_per_unit: float

    # === OpEx ===
    utilities_total: float
    repairs_maint_total: float
    contract_services_total: float
    marketing_total: float
    general_admin_total: float
    turnover_total: float
    misc_total: float
    insurance_total: float
    opex_categories_total: float
    payroll_total: float
    mgmt_fee_total: float
    total_opex: float
    opex_per_unit: float
    opex_ratio: float

    # === Returns ===
    noi: float
    noi_per_unit: float
    noi_per_sf: float
    unlevered_yield_on_cost: float

    @classmethod
    def empty(cls) -> "CalculationResults":
        """All-zero results, shown before a one-pager is loaded."""
        values: Dict[str, Any] = {f.name: 0.0 for f in fields(cls)}
        values["total_units"] = 0
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dict keyed by field name."""
        return asdict(self)

    def summary_columns(self) -> Dict[str, float]:
        """Cached summary columns a caller persists for list/report views."""
        return {
            "calc_total_nrsf": self.total_nrsf,
            "calc_total_gbsf": self.total_gbsf,
            "calc_gpr": self.gross_potential_rent,
            "calc_net_revenue": self.net_revenue,
            "calc_total_budget": self.total_budget,
            "calc_hard_cost": self.hard_cost,
            "calc_soft_cost": self.soft_cost,
            "calc_total_opex": self.total_opex,
            "calc_noi": self.noi,
            "calc_yoc": self.unlevered_yield_on_cost,
            "calc_cost_per_unit": self.cost_per_unit,
            "calc_noi_per_unit": self.noi_per_unit,
        }


def calculate_all(calc_input: CalculationInput) -> CalculationResults:
    """Run every calculation stage and flatten the results.

    SINGLE ENTRY POINT for a one-pager evaluation. Pure and idempotent: the
    same input always produces the same results and nothing is mutated.

    Args:
        calc_input: One-pager assumptions, child rows and site data.

    Returns:
        CalculationResults with every derived value.

    Example:
        >>> results = calculate_all(CalculationInput(one_pager, unit_mix=rows, site_area_sf=130_680))
        >>> f"{results.unlevered_yield_on_cost:.2%}"
        '3.69%'
    """
    op = calc_input.one_pager

    # Site & density
    site_area_acres = calc_input.site_area_sf / SF_PER_ACRE

    # Unit mix
    agg = aggregate_unit_mix(calc_input.unit_mix, op.efficiency_ratio)

    # Revenue
    rev = calculate_revenue(
        agg.gross_potential_rent,
        op.other_income_per_unit_month,
        agg.total_units,
        op.vacancy_rate,
    )

    # Budget
    bud = calculate_budget(
        op.hard_cost_per_nrsf,
        agg.total_nrsf,
        agg.total_gbsf,
        op.land_cost,
        op.soft_cost_pct,
        op.use_detailed_soft_costs,
        calc_input.soft_cost_details,
        agg.total_units,
        calc_input.site_area_sf,
    )

    # Property tax (needed before opex)
    tax = calculate_property_tax(
        bud.hard_cost,
        op.land_cost,
        bud.soft_cost,
        op.tax_assessed_pct_hard,
        op.tax_assessed_pct_land,
        op.tax_assessed_pct_soft,
        op.tax_mil_rate,
        agg.total_units,
    )

    # OpEx
    opex = calculate_opex(
        op,
        agg.total_units,
        rev.net_revenue,
        calc_input.payroll,
        tax.property_tax,
    )

    # Returns
    ret = calculate_returns(
        rev.net_revenue,
        opex.total_opex,
        bud.total_budget,
        agg.total_units,
        agg.total_nrsf,
    )

    logger.debug(
        "calculate_all %r: units=%d budget=%.0f noi=%.0f yoc=%.4f",
        op.name, agg.total_units, bud.total_budget, ret.noi, ret.unlevered_yield_on_cost,
    )

    return CalculationResults(
        site_area_acres=site_area_acres,
        density_units_per_acre=safe_divide(agg.total_units, site_area_acres),
        recommended_units_low=site_area_acres * calc_input.product_type_density_low,
        recommended_units_high=site_area_acres * calc_input.product_type_density_high,
        total_units=agg.total_units,
        total_nrsf=agg.total_nrsf,
        total_gbsf=agg.total_gbsf,
        weighted_avg_unit_sf=agg.weighted_avg_unit_sf,
        weighted_avg_rent_per_sf=agg.weighted_avg_rent_per_sf,
        gross_potential_rent=rev.gross_potential_rent,
        other_income=rev.other_income,
        gross_potential_revenue=rev.gross_potential_revenue,
        vacancy_loss=rev.vacancy_loss,
        net_revenue=rev.net_revenue,
        hard_cost=bud.hard_cost,
        hard_cost_per_gbsf=bud.hard_cost_per_gbsf,
        soft_cost=bud.soft_cost,
        soft_cost_pct_display=bud.soft_cost_pct_display,
        land_cost=bud.land_cost,
        total_budget=bud.total_budget,
        cost_per_unit=bud.cost_per_unit,
        cost_per_nrsf=bud.cost_per_nrsf,
        cost_per_gbsf=bud.cost_per_gbsf,
        land_cost_per_unit=bud.land_cost_per_unit,
        land_cost_per_sf=bud.land_cost_per_sf,
        assessed_value_hard=tax.assessed_value_hard,
        assessed_value_land=tax.assessed_value_land,
        assessed_value_soft=tax.assessed_value_soft,
        assessed_value=tax.assessed_value,
        property_tax_total=tax.property_tax,
        property_tax_per_unit=tax.property_tax_per_unit,
        utilities_total=opex.utilities_total,
        repairs_maint_total=opex.repairs_maint_total,
        contract_services_total=opex.contract_services_total,
        marketing_total=opex.marketing_total,
        general_admin_total=opex.general_admin_total,
        turnover_total=opex.turnover_total,
        misc_total=opex.misc_total,
        insurance_total=opex.insurance_total,
        opex_categories_total=opex.opex_categories_total,
        payroll_total=opex.payroll_total,
        mgmt_fee_total=opex.mgmt_fee_total,
        total_opex=opex.total_opex,
        opex_per_unit=opex.opex_per_unit,
        opex_ratio=opex.opex_ratio,
        noi=ret.noi,
        noi_per_unit=ret.noi_per_unit,
        noi_per_sf=ret.noi_per_sf,
        unlevered_yield_on_cost=ret.unlevered_yield_on_cost,
    )
