"""Sensitivity analysis: re-run the pipeline under perturbed inputs.

Three one-dimensional sweeps (rent, hard cost, land cost) and a
two-dimensional rent x hard cost yield-on-cost matrix. Steps are deltas
from the one-pager's base assumption, not absolute values:

- Rent steps are $/SF/month added to the weighted average rent/SF. The
  whole GPR is scaled by (base + step) / base instead of re-pricing each
  unit type.
- Hard cost steps are $/NRSF added to hard_cost_per_nrsf.
- Land cost steps are dollars added to land_cost.

The base one-pager is never modified; each point threads one adjusted
value through an otherwise identical run of the downstream stages, so a
step of exactly 0 reproduces calculate_all().

Typical usage:
    from underwriting.calculations.sensitivity import run_sensitivity_suite

    analysis = run_sensitivity_suite(one_pager, unit_mix, payroll, soft_cost_details)
    print(analysis.matrix.to_dataframe())
"""

import logging
from dataclasses import dataclass, asdict
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from ..models.one_pager import OnePager, UnitMixRow, PayrollRow, SoftCostDetailRow
from .units import aggregate_unit_mix, UnitMixAggregates
from .revenue import calculate_revenue, RevenueResult
from .costs import calculate_budget, BudgetResult
from .property_tax import calculate_property_tax
from .opex import calculate_opex
from .metrics import calculate_returns, ReturnsResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SensitivityRow:
    """One point of a one-dimensional sweep."""

    step: float
    adjusted_value: float  # Base assumption + step
    total_budget: float
    gpr: float  # Scaled GPR for rent sweeps, base GPR otherwise
    noi: float
    yoc: float  # Unlevered yield on cost


@dataclass(frozen=True)
class SensitivityMatrix:
    """Yield on cost over every (rent step, hard cost step) pair.

    Attributes:
        rent_steps: Row axis.
        hard_cost_steps: Column axis.
        values: values[rent_idx][hc_idx] = yield on cost.
        base_rent_idx: Row of the base case, None if the axis is empty.
        base_hc_idx: Column of the base case, None if the axis is empty.
    """

    rent_steps: Tuple[float, ...]
    hard_cost_steps: Tuple[float, ...]
    values: Tuple[Tuple[float, ...], ...]
    base_rent_idx: Optional[int]
    base_hc_idx: Optional[int]

    @property
    def shape(self) -> Tuple[int, int]:
        """(number of rent steps, number of hard cost steps)."""
        return len(self.rent_steps), len(self.hard_cost_steps)

    @property
    def base_value(self) -> Optional[float]:
        """Yield on cost at the base case cell."""
        if self.base_rent_idx is None or self.base_hc_idx is None:
            return None
        return self.values[self.base_rent_idx][self.base_hc_idx]

    def to_array(self) -> np.ndarray:
        """Get the matrix as a 2-D array shaped (rent steps, hard cost steps)."""
        return np.array(self.values, dtype=float).reshape(self.shape)

    def to_dataframe(self) -> pd.DataFrame:
        """Get the matrix as a DataFrame indexed by rent step, columned by hard cost step."""
        return pd.DataFrame(
            self.to_array(),
            index=pd.Index(self.rent_steps, name="rent_step"),
            columns=pd.Index(self.hard_cost_steps, name="hard_cost_step"),
        )


@dataclass(frozen=True)
class SensitivityAnalysis:
    """All sweeps for one one-pager, as shown on the sensitivity page."""

    rent: List[SensitivityRow]
    hard_cost: List[SensitivityRow]
    land_cost: List[SensitivityRow]
    matrix: SensitivityMatrix


def _scale_gpr(agg: UnitMixAggregates, rent_step: float) -> Tuple[float, float]:
    """Apply a rent/SF delta to GPR proportionally.

    Returns:
        Tuple of (adjusted rent/SF, adjusted GPR). A zero base rent leaves
        GPR unchanged.
    """
    base_rent_psf = agg.weighted_avg_rent_per_sf
    adjusted_rent_psf = base_rent_psf + rent_step
    scale_factor = adjusted_rent_psf / base_rent_psf if base_rent_psf > 0 else 1.0
    return adjusted_rent_psf, agg.gross_potential_rent * scale_factor


def _revenue_for(one_pager: OnePager, agg: UnitMixAggregates, gross_potential_rent: float) -> RevenueResult:
    return calculate_revenue(
        gross_potential_rent,
        one_pager.other_income_per_unit_month,
        agg.total_units,
        one_pager.vacancy_rate,
    )


def _run_budget_to_returns(
    one_pager: OnePager,
    agg: UnitMixAggregates,
    rev: RevenueResult,
    payroll: Sequence[PayrollRow],
    soft_cost_details: Sequence[SoftCostDetailRow],
    hard_cost_per_nrsf: float,
    land_cost: float,
) -> Tuple[BudgetResult, ReturnsResult]:
    """Run budget -> property tax -> opex -> returns with adjusted cost inputs."""
    bud = calculate_budget(
        hard_cost_per_nrsf,
        agg.total_nrsf,
        agg.total_gbsf,
        land_cost,
        one_pager.soft_cost_pct,
        one_pager.use_detailed_soft_costs,
        soft_cost_details,
        agg.total_units,
        0.0,  # Site area only feeds land $/SF
    )

    tax = calculate_property_tax(
        bud.hard_cost,
        land_cost,
        bud.soft_cost,
        one_pager.tax_assessed_pct_hard,
        one_pager.tax_assessed_pct_land,
        one_pager.tax_assessed_pct_soft,
        one_pager.tax_mil_rate,
        agg.total_units,
    )

    opex = calculate_opex(
        one_pager,
        agg.total_units,
        rev.net_revenue,
        payroll,
        tax.property_tax,
    )

    ret = calculate_returns(
        rev.net_revenue,
        opex.total_opex,
        bud.total_budget,
        agg.total_units,
        agg.total_nrsf,
    )
    return bud, ret


def calculate_rent_sensitivity(
    one_pager: OnePager,
    unit_mix: Iterable[UnitMixRow],
    payroll: Iterable[PayrollRow],
    soft_cost_details: Iterable[SoftCostDetailRow],
    rent_steps: Optional[Sequence[float]] = None,
) -> List[SensitivityRow]:
    """Sweep weighted average rent/SF.

    Args:
        one_pager: Base assumptions.
        unit_mix: Unit mix rows.
        payroll: Payroll roster.
        soft_cost_details: Itemized soft costs.
        rent_steps: $/SF/month deltas. Defaults to the one-pager's steps.

    Returns:
        One SensitivityRow per step, adjusted_value = adjusted rent/SF.
    """
    steps = one_pager.sensitivity_rent_steps if rent_steps is None else tuple(rent_steps)
    payroll = tuple(payroll)
    soft_cost_details = tuple(soft_cost_details)
    agg = aggregate_unit_mix(unit_mix, one_pager.efficiency_ratio)

    logger.debug("Rent sensitivity: %d steps from base $%.4f/SF", len(steps), agg.weighted_avg_rent_per_sf)

    rows = []
    for step in steps:
        adjusted_rent_psf, adjusted_gpr = _scale_gpr(agg, step)
        rev = _revenue_for(one_pager, agg, adjusted_gpr)
        bud, ret = _run_budget_to_returns(
            one_pager, agg, rev, payroll, soft_cost_details,
            one_pager.hard_cost_per_nrsf, one_pager.land_cost,
        )
        rows.append(
            SensitivityRow(
                step=step,
                adjusted_value=adjusted_rent_psf,
                total_budget=bud.total_budget,
                gpr=adjusted_gpr,
                noi=ret.noi,
                yoc=ret.unlevered_yield_on_cost,
            )
        )
    return rows


def calculate_hard_cost_sensitivity(
    one_pager: OnePager,
    unit_mix: Iterable[UnitMixRow],
    payroll: Iterable[PayrollRow],
    soft_cost_details: Iterable[SoftCostDetailRow],
    hard_cost_steps: Optional[Sequence[float]] = None,
) -> List[SensitivityRow]:
    """Sweep hard cost per NRSF.

    Revenue does not depend on hard cost and is computed once.

    Args:
        one_pager: Base assumptions.
        unit_mix: Unit mix rows.
        payroll: Payroll roster.
        soft_cost_details: Itemized soft costs.
        hard_cost_steps: $/NRSF deltas. Defaults to the one-pager's steps.

    Returns:
        One SensitivityRow per step, adjusted_value = adjusted $/NRSF.
    """
    steps = one_pager.sensitivity_hard_cost_steps if hard_cost_steps is None else tuple(hard_cost_steps)
    payroll = tuple(payroll)
    soft_cost_details = tuple(soft_cost_details)
    agg = aggregate_unit_mix(unit_mix, one_pager.efficiency_ratio)
    rev = _revenue_for(one_pager, agg, agg.gross_potential_rent)

    logger.debug("Hard cost sensitivity: %d steps from base $%.2f/NRSF", len(steps), one_pager.hard_cost_per_nrsf)

    rows = []
    for step in steps:
        adjusted_hc_per_nrsf = one_pager.hard_cost_per_nrsf + step
        bud, ret = _run_budget_to_returns(
            one_pager, agg, rev, payroll, soft_cost_details,
            adjusted_hc_per_nrsf, one_pager.land_cost,
        )
        rows.append(
            SensitivityRow(
                step=step,
                adjusted_value=adjusted_hc_per_nrsf,
                total_budget=bud.total_budget,
                gpr=agg.gross_potential_rent,
                noi=ret.noi,
                yoc=ret.unlevered_yield_on_cost,
            )
        )
    return rows


def calculate_land_cost_sensitivity(
    one_pager: OnePager,
    unit_mix: Iterable[UnitMixRow],
    payroll: Iterable[PayrollRow],
    soft_cost_details: Iterable[SoftCostDetailRow],
    land_cost_steps: Optional[Sequence[float]] = None,
) -> List[SensitivityRow]:
    """Sweep land cost by absolute dollar deltas.

    Land flows into both the budget and the assessed value, so property tax
    and opex move with it.

    Args:
        one_pager: Base assumptions.
        unit_mix: Unit mix rows.
        payroll: Payroll roster.
        soft_cost_details: Itemized soft costs.
        land_cost_steps: Dollar deltas. Defaults to the one-pager's steps.

    Returns:
        One SensitivityRow per step, adjusted_value = adjusted land cost.
    """
    steps = one_pager.sensitivity_land_cost_steps if land_cost_steps is None else tuple(land_cost_steps)
    payroll = tuple(payroll)
    soft_cost_details = tuple(soft_cost_details)
    agg = aggregate_unit_mix(unit_mix, one_pager.efficiency_ratio)
    rev = _revenue_for(one_pager, agg, agg.gross_potential_rent)

    logger.debug("Land cost sensitivity: %d steps from base $%.0f", len(steps), one_pager.land_cost)

    rows = []
    for step in steps:
        adjusted_land_cost = one_pager.land_cost + step
        bud, ret = _run_budget_to_returns(
            one_pager, agg, rev, payroll, soft_cost_details,
            one_pager.hard_cost_per_nrsf, adjusted_land_cost,
        )
        rows.append(
            SensitivityRow(
                step=step,
                adjusted_value=adjusted_land_cost,
                total_budget=bud.total_budget,
                gpr=agg.gross_potential_rent,
                noi=ret.noi,
                yoc=ret.unlevered_yield_on_cost,
            )
        )
    return rows


def find_base_index(steps: Sequence[float], strict: bool = False, axis: str = "steps") -> Optional[int]:
    """Locate the base case (zero delta) in a step array.

    Falls back to the midpoint when no exact 0 is present, which assumes the
    array is symmetric around the base case.

    Args:
        steps: Step deltas.
        strict: Raise instead of falling back to the midpoint.
        axis: Axis name for messages.

    Returns:
        Index of the 0 step, the midpoint index, or None for an empty array.

    Raises:
        ValueError: If strict and no step equals 0.
    """
    for i, step in enumerate(steps):
        if step == 0:
            return i

    if strict:
        raise ValueError(f"{axis} have no 0 entry for the base case: {list(steps)}")
    if not steps:
        return None

    midpoint = len(steps) // 2
    logger.warning("%s have no 0 entry; using midpoint index %d as the base case", axis, midpoint)
    return midpoint


def calculate_sensitivity_matrix(
    one_pager: OnePager,
    unit_mix: Iterable[UnitMixRow],
    payroll: Iterable[PayrollRow],
    soft_cost_details: Iterable[SoftCostDetailRow],
    rent_steps: Optional[Sequence[float]] = None,
    hard_cost_steps: Optional[Sequence[float]] = None,
    strict: bool = False,
) -> SensitivityMatrix:
    """Cross rent and hard cost steps into a yield on cost matrix.

    For each rent step the scaled revenue is computed once, then every hard
    cost step re-runs budget -> tax -> opex -> returns against it.

    Args:
        one_pager: Base assumptions.
        unit_mix: Unit mix rows.
        payroll: Payroll roster.
        soft_cost_details: Itemized soft costs.
        rent_steps: $/SF/month deltas (rows). Defaults to the one-pager's steps.
        hard_cost_steps: $/NRSF deltas (columns). Defaults to the one-pager's steps.
        strict: Require an exact 0 step on both axes.

    Returns:
        SensitivityMatrix shaped (len(rent_steps), len(hard_cost_steps)).

    Raises:
        ValueError: If strict and either axis lacks a 0 step.
    """
    r_steps = one_pager.sensitivity_rent_steps if rent_steps is None else tuple(rent_steps)
    hc_steps = one_pager.sensitivity_hard_cost_steps if hard_cost_steps is None else tuple(hard_cost_steps)
    payroll = tuple(payroll)
    soft_cost_details = tuple(soft_cost_details)

    base_rent_idx = find_base_index(r_steps, strict=strict, axis="rent steps")
    base_hc_idx = find_base_index(hc_steps, strict=strict, axis="hard cost steps")

    agg = aggregate_unit_mix(unit_mix, one_pager.efficiency_ratio)

    logger.debug("Sensitivity matrix: %d x %d", len(r_steps), len(hc_steps))

    values = []
    for rent_step in r_steps:
        _adjusted_rent_psf, adjusted_gpr = _scale_gpr(agg, rent_step)
        rev = _revenue_for(one_pager, agg, adjusted_gpr)

        row = []
        for hc_step in hc_steps:
            _bud, ret = _run_budget_to_returns(
                one_pager, agg, rev, payroll, soft_cost_details,
                one_pager.hard_cost_per_nrsf + hc_step, one_pager.land_cost,
            )
            row.append(ret.unlevered_yield_on_cost)
        values.append(tuple(row))

    return SensitivityMatrix(
        rent_steps=r_steps,
        hard_cost_steps=hc_steps,
        values=tuple(values),
        base_rent_idx=base_rent_idx,
        base_hc_idx=base_hc_idx,
    )


def run_sensitivity_suite(
    one_pager: OnePager,
    unit_mix: Iterable[UnitMixRow],
    payroll: Iterable[PayrollRow],
    soft_cost_details: Iterable[SoftCostDetailRow],
    strict: bool = False,
) -> SensitivityAnalysis:
    """Run all sweeps and the matrix with the one-pager's stored step arrays."""
    unit_mix = tuple(unit_mix)
    payroll = tuple(payroll)
    soft_cost_details = tuple(soft_cost_details)

    return SensitivityAnalysis(
        rent=calculate_rent_sensitivity(one_pager, unit_mix, payroll, soft_cost_details),
        hard_cost=calculate_hard_cost_sensitivity(one_pager, unit_mix, payroll, soft_cost_details),
        land_cost=calculate_land_cost_sensitivity(one_pager, unit_mix, payroll, soft_cost_details),
        matrix=calculate_sensitivity_matrix(one_pager, unit_mix, payroll, soft_cost_details, strict=strict),
    )


SENSITIVITY_COLUMNS = ["step", "adjusted_value", "total_budget", "gpr", "noi", "yoc"]


def sensitivity_to_dataframe(rows: Iterable[SensitivityRow]) -> pd.DataFrame:
    """Convert sweep rows to a DataFrame with one row per step."""
    return pd.DataFrame([asdict(r) for r in rows], columns=SENSITIVITY_COLUMNS)
