"""Return metrics (NOI, yield on cost) and one-pager comparison."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Mapping, Tuple

import pandas as pd

from .ratios import safe_divide

if TYPE_CHECKING:
    from .engine import CalculationResults


@dataclass(frozen=True)
class ReturnsResult:
    """Stabilized, unlevered return metrics."""

    noi: float
    noi_per_unit: float
    noi_per_sf: float  # Per NRSF
    unlevered_yield_on_cost: float  # NOI / total budget


def calculate_returns(
    net_revenue: float,
    total_opex: float,
    total_budget: float,
    total_units: int,
    total_nrsf: float,
) -> ReturnsResult:
    """Calculate NOI and yield on cost.

    NOI and yield on cost are not floored; a negative value is a losing deal.

    Args:
        net_revenue: Annual net revenue.
        total_opex: Annual operating expenses including property tax.
        total_budget: Total development budget.
        total_units: Number of units.
        total_nrsf: Total net rentable SF.

    Returns:
        ReturnsResult with NOI, per-unit/per-SF NOI and yield on cost.
    """
    noi = net_revenue - total_opex

    return ReturnsResult(
        noi=noi,
        noi_per_unit=safe_divide(noi, total_units),
        noi_per_sf=safe_divide(noi, total_nrsf),
        unlevered_yield_on_cost=safe_divide(noi, total_budget),
    )


# (CalculationResults field, row label, display format)
COMPARISON_METRICS: List[Tuple[str, str, str]] = [
    ("unlevered_yield_on_cost", "Unlevered YOC", "pct"),
    ("noi", "NOI", "usd"),
    ("noi_per_unit", "NOI / Unit", "usd"),
    ("total_units", "Total Units", "num"),
    ("total_nrsf", "Total NRSF", "num"),
    ("total_gbsf", "Total GBSF", "num"),
    ("gross_potential_rent", "GPR", "usd"),
    ("net_revenue", "Net Revenue", "usd"),
    ("hard_cost", "Hard Cost (Total)", "usd"),
    ("soft_cost", "Soft Cost", "usd"),
    ("total_budget", "Total Budget", "usd"),
    ("cost_per_unit", "Cost / Unit", "usd"),
    ("total_opex", "Total OpEx", "usd"),
    ("opex_per_unit", "OpEx / Unit", "usd"),
]


def compare_one_pagers(results: Mapping[str, "CalculationResults"]) -> pd.DataFrame:
    """Build a side-by-side comparison of one-pager results.

    Args:
        results: One-pager name -> CalculationResults, in display order.

    Returns:
        DataFrame indexed by metric label with one column per one-pager.
    """
    data = {
        name: [getattr(calc, field_name) for field_name, _label, _fmt in COMPARISON_METRICS]
        for name, calc in results.items()
    }
    index = pd.Index([label for _field, label, _fmt in COMPARISON_METRICS], name="Metric")
    return pd.DataFrame(data, index=index)


def _format_metric(value: float, fmt: str) -> str:
    if fmt == "pct":
        return f"{value:.2%}"
    if fmt == "usd":
        return f"${value:,.0f}"
    return f"{value:,.0f}"


def format_comparison_table(comparison: pd.DataFrame) -> str:
    """Format a comparison DataFrame as a text table.

    Args:
        comparison: Output of compare_one_pagers().

    Returns:
        Formatted string table.
    """
    formats = {label: fmt for _field, label, fmt in COMPARISON_METRICS}
    names = list(comparison.columns)
    width = 25 + 16 * len(names)

    lines = [
        "=" * width,
        "ONE-PAGER COMPARISON",
        "=" * width,
        f"{'Metric':<25}" + "".join(f"{str(n)[:15]:>16}" for n in names),
        "-" * width,
    ]
    for label, row in comparison.iterrows():
        fmt = formats.get(label, "num")
        lines.append(f"{label:<25}" + "".join(f"{_format_metric(v, fmt):>16}" for v in row))
    lines.append("=" * width)

    return "\n".join(lines)
