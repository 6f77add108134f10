"""Lookup constants and enumerations shared by the underwriting engine."""

from enum import Enum
from typing import Tuple


class RentInputMode(str, Enum):
    """How a unit mix row states its rent."""

    PER_SF = "per_sf"  # Monthly rent per net rentable SF
    WHOLE_DOLLAR = "whole_dollar"  # Monthly rent per unit


class PayrollLineType(str, Enum):
    """Payroll line kind."""

    EMPLOYEE = "employee"  # headcount x base x (1 + bonus) x (1 + burden)
    CONTRACT = "contract"  # Fixed annual amount


SF_PER_ACRE = 43_560
MONTHS_PER_YEAR = 12
MILL_RATE_BASIS = 1_000  # Mill rate is tax per $1,000 of assessed value

# Sensitivity step arrays (deltas applied to the base assumption)
DEFAULT_RENT_STEPS: Tuple[float, ...] = (-0.15, -0.10, -0.05, 0.0, 0.05, 0.10, 0.15)  # $/SF/month
DEFAULT_HARD_COST_STEPS: Tuple[float, ...] = (-15.0, -10.0, -5.0, 0.0, 5.0, 10.0, 15.0)  # $/NRSF
DEFAULT_LAND_COST_STEPS: Tuple[float, ...] = (
    -2_000_000.0,
    -1_000_000.0,
    -500_000.0,
    0.0,
    500_000.0,
    1_000_000.0,
    2_000_000.0,
)

# Per-unit-per-year operating expense categories: (one-pager field, display label)
OPEX_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("opex_utilities", "Utilities"),
    ("opex_repairs_maintenance", "Repairs & Maint."),
    ("opex_contract_services", "Contract Svcs"),
    ("opex_marketing", "Marketing"),
    ("opex_general_admin", "G&A"),
    ("opex_turnover", "Turnover"),
    ("opex_misc", "Misc"),
    ("opex_insurance", "Insurance"),
)
