"""Data models for the pursuit underwriting engine."""

from .lookups import (
    RentInputMode,
    PayrollLineType,
    SF_PER_ACRE,
    MONTHS_PER_YEAR,
    MILL_RATE_BASIS,
    DEFAULT_RENT_STEPS,
    DEFAULT_HARD_COST_STEPS,
    DEFAULT_LAND_COST_STEPS,
    OPEX_CATEGORIES,
)
from .one_pager import (
    UnitMixRow,
    PayrollRow,
    SoftCostDetailRow,
    OnePager,
)
from .templates import (
    PayrollDefault,
    DataModelTemplate,
    create_one_pager,
)

__all__ = [
    "RentInputMode",
    "PayrollLineType",
    "SF_PER_ACRE",
    "MONTHS_PER_YEAR",
    "MILL_RATE_BASIS",
    "DEFAULT_RENT_STEPS",
    "DEFAULT_HARD_COST_STEPS",
    "DEFAULT_LAND_COST_STEPS",
    "OPEX_CATEGORIES",
    "UnitMixRow",
    "PayrollRow",
    "SoftCostDetailRow",
    "OnePager",
    "PayrollDefault",
    "DataModelTemplate",
    "create_one_pager",
]
