"""One-pager data model: the assumption record and its child rows.

Every record here is a frozen value object. The engine reads them and never
writes back; callers build fresh records before each calculation.
"""

from dataclasses import dataclass, field
from typing import Tuple

from .lookups import (
    RentInputMode,
    PayrollLineType,
    DEFAULT_RENT_STEPS,
    DEFAULT_HARD_COST_STEPS,
    DEFAULT_LAND_COST_STEPS,
)


@dataclass(frozen=True)
class UnitMixRow:
    """Single unit-type cohort in the unit mix.

    Rows with ``unit_count == 0`` are placeholders and are ignored by the
    aggregator. Accepts ``rent_input_mode`` as a plain string.
    """

    unit_type: str  # Display label, e.g. "1BR"
    unit_count: int = 0
    avg_unit_sf: float = 0.0
    rent_input_mode: RentInputMode = RentInputMode.PER_SF
    rent_per_sf: float = 0.0  # Monthly rent per NRSF (per_sf mode)
    rent_whole_dollar: float = 0.0  # Monthly rent per unit (whole_dollar mode)
    sort_order: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "rent_input_mode", RentInputMode(self.rent_input_mode))

    @property
    def is_active(self) -> bool:
        """True if the row contributes to aggregation."""
        return self.unit_count > 0


@dataclass(frozen=True)
class PayrollRow:
    """Single payroll line.

    Contract lines use ``fixed_amount`` only; employee lines use headcount,
    base compensation and bonus and ignore ``fixed_amount``.
    """

    role_name: str
    line_type: PayrollLineType = PayrollLineType.EMPLOYEE
    headcount: float = 0.0  # Fractional FTEs allowed
    base_compensation: float = 0.0  # Annual
    bonus_pct: float = 0.0
    fixed_amount: float = 0.0  # Annual contract amount
    sort_order: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "line_type", PayrollLineType(self.line_type))


@dataclass(frozen=True)
class SoftCostDetailRow:
    """Itemized soft cost line, used only in detailed soft cost mode."""

    line_item_name: str
    amount: float = 0.0
    sort_order: int = 0


@dataclass(frozen=True)
class OnePager:
    """Owner-editable assumptions for one feasibility scenario.

    Defaults match a freshly created one-pager with no template applied.
    """

    name: str = ""

    # === Site & Density ===
    efficiency_ratio: float = 0.85  # NRSF / GBSF

    # === Revenue ===
    other_income_per_unit_month: float = 0.0
    vacancy_rate: float = 0.07

    # === Budget ===
    hard_cost_per_nrsf: float = 0.0
    land_cost: float = 0.0
    soft_cost_pct: float = 0.30  # As % of hard cost
    use_detailed_soft_costs: bool = False  # True = sum of SoftCostDetailRow amounts

    # === OpEx ($/unit/year) ===
    opex_utilities: float = 0.0
    opex_repairs_maintenance: float = 0.0
    opex_contract_services: float = 0.0
    opex_marketing: float = 0.0
    opex_general_admin: float = 0.0
    opex_turnover: float = 0.0
    opex_misc: float = 0.0
    opex_insurance: float = 0.0
    mgmt_fee_pct: float = 0.03  # As % of net revenue

    # === Payroll ===
    payroll_burden_pct: float = 0.30  # Taxes/benefits as % of bonus-loaded pay

    # === Property Tax ===
    tax_mil_rate: float = 0.0  # Per $1,000 of assessed value
    tax_assessed_pct_hard: float = 1.0
    tax_assessed_pct_land: float = 1.0
    tax_assessed_pct_soft: float = 1.0

    # === Sensitivity ===
    sensitivity_rent_steps: Tuple[float, ...] = field(default=DEFAULT_RENT_STEPS)
    sensitivity_hard_cost_steps: Tuple[float, ...] = field(default=DEFAULT_HARD_COST_STEPS)
    sensitivity_land_cost_steps: Tuple[float, ...] = field(default=DEFAULT_LAND_COST_STEPS)

    def __post_init__(self) -> None:
        # Step arrays may arrive as lists from a JSON/row backend
        for name in (
            "sensitivity_rent_steps",
            "sensitivity_hard_cost_steps",
            "sensitivity_land_cost_steps",
        ):
            object.__setattr__(self, name, tuple(getattr(self, name)))
