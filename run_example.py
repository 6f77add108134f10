#!/usr/bin/env python3
"""Example script to underwrite a sample pursuit one-pager."""

import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

import pandas as pd

from underwriting.models import (
    OnePager,
    UnitMixRow,
    PayrollRow,
    SoftCostDetailRow,
    SF_PER_ACRE,
)
from underwriting.calculations import (
    CalculationInput,
    calculate_all,
    run_sensitivity_suite,
    sensitivity_to_dataframe,
    compare_one_pagers,
    format_comparison_table,
)
from underwriting.export import ExcelReportConfig, generate_one_pager_excel


def get_sample_one_pager() -> OnePager:
    """Get a 120-unit garden/walk-up base case."""
    return OnePager(
        name="Base Case",
        efficiency_ratio=0.85,
        other_income_per_unit_month=50.0,
        vacancy_rate=0.07,
        hard_cost_per_nrsf=250.0,
        land_cost=4_000_000.0,
        soft_cost_pct=0.30,
        opex_utilities=600.0,
        opex_repairs_maintenance=500.0,
        opex_contract_services=400.0,
        opex_marketing=150.0,
        opex_general_admin=300.0,
        opex_turnover=250.0,
        opex_misc=100.0,
        opex_insurance=450.0,
        mgmt_fee_pct=0.03,
        payroll_burden_pct=0.30,
        tax_mil_rate=20.0,
        tax_assessed_pct_hard=1.0,
        tax_assessed_pct_land=1.0,
        tax_assessed_pct_soft=0.5,
    )


def get_sample_unit_mix() -> list[UnitMixRow]:
    """Get the sample unit mix (3BR is an unfilled placeholder)."""
    return [
        UnitMixRow("Studio", unit_count=20, avg_unit_sf=550, rent_input_mode="per_sf", rent_per_sf=2.60, sort_order=0),
        UnitMixRow("1BR", unit_count=60, avg_unit_sf=750, rent_input_mode="per_sf", rent_per_sf=2.40, sort_order=1),
        UnitMixRow("2BR", unit_count=40, avg_unit_sf=1100, rent_input_mode="whole_dollar", rent_whole_dollar=2400, sort_order=2),
        UnitMixRow("3BR", unit_count=0, avg_unit_sf=1350, rent_input_mode="per_sf", rent_per_sf=2.10, sort_order=3),
    ]


def get_sample_payroll() -> list[PayrollRow]:
    """Get the sample on-site payroll roster."""
    return [
        PayrollRow("Community Manager", "employee", headcount=1, base_compensation=80_000, bonus_pct=0.10, sort_order=0),
        PayrollRow("Maintenance Tech", "employee", headcount=1.5, base_compensation=55_000, bonus_pct=0.05, sort_order=1),
        PayrollRow("Landscaping", "contract", fixed_amount=24_000, sort_order=2),
    ]


def get_sample_soft_costs() -> list[SoftCostDetailRow]:
    """Get itemized soft costs for the detailed-mode variant."""
    return [
        SoftCostDetailRow("Architecture & Engineering", 2_400_000, sort_order=0),
        SoftCostDetailRow("Permits & Impact Fees", 1_800_000, sort_order=1),
        SoftCostDetailRow("Legal & Closing", 450_000, sort_order=2),
        SoftCostDetailRow("Construction Interest", 2_100_000, sort_order=3),
    ]


def run_single_one_pager(excel_path: str | None = None):
    """Underwrite the base case and print its sensitivity analysis."""
    print("\n" + "=" * 60)
    print("PURSUIT UNDERWRITING")
    print("One-Pager Summary")
    print("=" * 60 + "\n")

    one_pager = get_sample_one_pager()
    unit_mix = get_sample_unit_mix()
    payroll = get_sample_payroll()
    soft_costs = get_sample_soft_costs()
    site_area_sf = 3 * SF_PER_ACRE

    calc_input = CalculationInput(
        one_pager=one_pager,
        unit_mix=unit_mix,
        payroll=payroll,
        soft_cost_details=soft_costs,
        site_area_sf=site_area_sf,
        product_type_density_low=30,
        product_type_density_high=45,
    )
    results = calculate_all(calc_input)

    print(f"{'Total Units':<28} {results.total_units:>15,d}")
    print(f"{'Total NRSF':<28} {results.total_nrsf:>15,.0f}")
    print(f"{'Total GBSF':<28} {results.total_gbsf:>15,.0f}")
    print(f"{'Density (units/acre)':<28} {results.density_units_per_acre:>15,.1f}")
    print(f"{'Gross Potential Rent':<28} ${results.gross_potential_rent:>14,.0f}")
    print(f"{'Net Revenue':<28} ${results.net_revenue:>14,.0f}")
    print(f"{'Total Budget':<28} ${results.total_budget:>14,.0f}")
    print(f"{'Cost / Unit':<28} ${results.cost_per_unit:>14,.0f}")
    print(f"{'Property Tax':<28} ${results.property_tax_total:>14,.0f}")
    print(f"{'Total OpEx':<28} ${results.total_opex:>14,.0f}")
    print(f"{'NOI':<28} ${results.noi:>14,.0f}")
    print(f"{'Unlevered Yield on Cost':<28} {results.unlevered_yield_on_cost:>15.2%}")

    analysis = run_sensitivity_suite(one_pager, unit_mix, payroll, soft_costs)

    with pd.option_context("display.float_format", "{:,.4f}".format, "display.width", 120):
        print("\nRENT SENSITIVITY")
        print(sensitivity_to_dataframe(analysis.rent).to_string(index=False))
        print("\nHARD COST SENSITIVITY")
        print(sensitivity_to_dataframe(analysis.hard_cost).to_string(index=False))
        print("\nLAND COST SENSITIVITY")
        print(sensitivity_to_dataframe(analysis.land_cost).to_string(index=False))
        print("\nYIELD ON COST MATRIX (rent step x hard cost step)")
        print(analysis.matrix.to_dataframe().to_string())

    if excel_path:
        data = generate_one_pager_excel(
            one_pager,
            results,
            unit_mix=unit_mix,
            payroll=payroll,
            sensitivity=analysis,
            config=ExcelReportConfig(pursuit_name="Sample Pursuit", product_type_name="Garden"),
        )
        Path(excel_path).write_bytes(data)
        print(f"\nWrote {excel_path} ({len(data):,} bytes)")


def run_comparison():
    """Compare the base case against two variants."""
    unit_mix = get_sample_unit_mix()
    payroll = get_sample_payroll()
    soft_costs = get_sample_soft_costs()
    base = get_sample_one_pager()

    variants = {
        base.name: base,
        "Detailed Soft": replace(base, name="Detailed Soft", use_detailed_soft_costs=True),
        "Value Eng.": replace(base, name="Value Eng.", hard_cost_per_nrsf=235.0, land_cost=3_500_000.0),
    }

    results = {
        name: calculate_all(CalculationInput(op, unit_mix, payroll, soft_costs, site_area_sf=3 * SF_PER_ACRE))
        for name, op in variants.items()
    }
    print("\n" + format_comparison_table(compare_one_pagers(results)))


def main():
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Pursuit underwriting one-pager example")
    parser.add_argument("--excel", metavar="PATH", help="Write the one-pager workbook to PATH")
    parser.add_argument("--compare", action="store_true", help="Also compare one-pager variants")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log engine debug output")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    run_single_one_pager(args.excel)

    if args.compare:
        run_comparison()

    print("\nDone.")


if __name__ == "__main__":
    main()
