"""Calculation modules for the pursuit underwriting engine."""

from .ratios import safe_divide
from .units import (
    calculate_unit_mix_row,
    aggregate_unit_mix,
    get_active_rows,
    get_total_units,
    UnitMixRowCalc,
    UnitMixAggregates,
)
from .revenue import calculate_revenue, RevenueResult
from .costs import calculate_budget, calculate_soft_cost, BudgetResult
from .property_tax import calculate_property_tax, PropertyTaxResult
from .opex import (
    calculate_opex,
    calculate_payroll_row_total,
    calculate_payroll_total,
    OpExResult,
)
from .metrics import (
    calculate_returns,
    ReturnsResult,
    compare_one_pagers,
    format_comparison_table,
)

# Unified engine - SINGLE ENTRY POINT
from .engine import (
    CalculationInput,
    CalculationResults,
    calculate_all,
)

# Sensitivity analysis
from .sensitivity import (
    SensitivityRow,
    SensitivityMatrix,
    SensitivityAnalysis,
    calculate_rent_sensitivity,
    calculate_hard_cost_sensitivity,
    calculate_land_cost_sensitivity,
    calculate_sensitivity_matrix,
    find_base_index,
    run_sensitivity_suite,
    sensitivity_to_dataframe,
)

__all__ = [
    "safe_divide",
    "calculate_unit_mix_row",
    "aggregate_unit_mix",
    "get_active_rows",
    "get_total_units",
    "UnitMixRowCalc",
    "UnitMixAggregates",
    "calculate_revenue",
    "RevenueResult",
    "calculate_budget",
    "calculate_soft_cost",
    "BudgetResult",
    "calculate_property_tax",
    "PropertyTaxResult",
    "calculate_opex",
    "calculate_payroll_row_total",
    "calculate_payroll_total",
    "OpExResult",
    "calculate_returns",
    "ReturnsResult",
    "compare_one_pagers",
    "format_comparison_table",
    "CalculationInput",
    "CalculationResults",
    "calculate_all",
    # Sensitivity
    "SensitivityRow",
    "SensitivityMatrix",
    "SensitivityAnalysis",
    "calculate_rent_sensitivity",
    "calculate_hard_cost_sensitivity",
    "calculate_land_cost_sensitivity",
    "calculate_sensitivity_matrix",
    "find_base_index",
    "run_sensitivity_suite",
    "sensitivity_to_dataframe",
]
