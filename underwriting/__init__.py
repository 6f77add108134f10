"""Pro-forma underwriting engine for development pursuits."""

from .calculations import (
    CalculationInput,
    CalculationResults,
    calculate_all,
    run_sensitivity_suite,
)

__all__ = [
    "CalculationInput",
    "CalculationResults",
    "calculate_all",
    "run_sensitivity_suite",
]
