"""Operating expense calculations: flat per-unit rates, payroll, fees and tax."""

from dataclasses import dataclass
from typing import Dict, Iterable

from ..models.lookups import PayrollLineType, OPEX_CATEGORIES
from ..models.one_pager import OnePager, PayrollRow
from .ratios import safe_divide


@dataclass(frozen=True)
class OpExResult:
    """Results of the annual operating expense calculation."""

    # Flat per-unit categories (rate x units)
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
    property_tax_total: float

    total_opex: float  # Categories + payroll + mgmt fee + property tax
    opex_per_unit: float
    opex_ratio: float  # total_opex / net_revenue


def calculate_payroll_row_total(row: PayrollRow, payroll_burden_pct: float) -> float:
    """Calculate annual burdened cost of one payroll line.

    Contract lines: fixed amount as-is.
    Employee lines: headcount x base x (1 + bonus %) x (1 + burden %).

    Args:
        row: Payroll line.
        payroll_burden_pct: Payroll taxes and benefits as decimal.

    Returns:
        Annual cost for the line.
    """
    if row.line_type == PayrollLineType.CONTRACT:
        return row.fixed_amount
    return row.headcount * row.base_compensation * (1 + row.bonus_pct) * (1 + payroll_burden_pct)


def calculate_payroll_total(rows: Iterable[PayrollRow], payroll_burden_pct: float) -> float:
    """Sum burdened payroll across all lines."""
    return sum(calculate_payroll_row_total(r, payroll_burden_pct) for r in rows)


def calculate_category_totals(one_pager: OnePager, total_units: int) -> Dict[str, float]:
    """Scale each per-unit expense rate by the unit count.

    Returns:
        Dict of one-pager opex field name -> annual total.
    """
    return {name: getattr(one_pager, name) * total_units for name, _label in OPEX_CATEGORIES}


def calculate_opex(
    one_pager: OnePager,
    total_units: int,
    net_revenue: float,
    payroll_rows: Iterable[PayrollRow],
    property_tax_total: float,
) -> OpExResult:
    """Calculate total annual operating expenses.

    The management fee is revenue based (% of net revenue). Property tax is
    computed upstream and added as its own component.

    Args:
        one_pager: Assumptions supplying the per-unit rates, management fee
            and payroll burden.
        total_units: Number of units.
        net_revenue: Annual net revenue.
        payroll_rows: Payroll roster.
        property_tax_total: Annual property tax.

    Returns:
        OpExResult with category totals, payroll, fee, tax and ratios.
    """
    categories = calculate_category_totals(one_pager, total_units)
    opex_categories_total = sum(categories.values())

    payroll_total = calculate_payroll_total(payroll_rows, one_pager.payroll_burden_pct)
    mgmt_fee_total = one_pager.mgmt_fee_pct * net_revenue

    total_opex = opex_categories_total + payroll_total + mgmt_fee_total + property_tax_total

    return OpExResult(
        utilities_total=categories["opex_utilities"],
        repairs_maint_total=categories["opex_repairs_maintenance"],
        contract_services_total=categories["opex_contract_services"],
        marketing_total=categories["opex_marketing"],
        general_admin_total=categories["opex_general_admin"],
        turnover_total=categories["opex_turnover"],
        misc_total=categories["opex_misc"],
        insurance_total=categories["opex_insurance"],
        opex_categories_total=opex_categories_total,
        payroll_total=payroll_total,
        mgmt_fee_total=mgmt_fee_total,
        property_tax_total=property_tax_total,
        total_opex=total_opex,
        opex_per_unit=safe_divide(total_opex, total_units),
        opex_ratio=safe_divide(total_opex, net_revenue),
    )
