"""Tests for operating expense calculations."""

from dataclasses import replace

import pytest

from underwriting.models import PayrollRow, PayrollLineType
from underwriting.calculations.opex import (
    calculate_payroll_row_total,
    calculate_payroll_total,
    calculate_category_totals,
    calculate_opex,
)


class TestPayroll:
    """Tests for burdened payroll."""

    def test_employee_line(self):
        """Employee lines load bonus and burden."""
        row = PayrollRow("Manager", "employee", headcount=1, base_compensation=80_000, bonus_pct=0.10)
        assert calculate_payroll_row_total(row, 0.30) == pytest.approx(114_400.0)

    def test_fractional_headcount(self):
        """Fractional FTEs scale linearly."""
        row = PayrollRow("Tech", "employee", headcount=1.5, base_compensation=55_000, bonus_pct=0.05)
        assert calculate_payroll_row_total(row, 0.30) == pytest.approx(112_612.5)

    def test_contract_line_ignores_burden(self):
        """Contract lines are the fixed amount only."""
        row = PayrollRow(
            "Landscaping", PayrollLineType.CONTRACT,
            headcount=3, base_compensation=99_000, fixed_amount=24_000,
        )
        assert calculate_payroll_row_total(row, 0.30) == pytest.approx(24_000.0)

    def test_employee_line_ignores_fixed_amount(self):
        """Employee lines ignore fixed_amount."""
        row = PayrollRow("Porter", "employee", headcount=1, base_compensation=40_000, fixed_amount=10_000)
        assert calculate_payroll_row_total(row, 0.0) == pytest.approx(40_000.0)

    def test_roster_total(self, payroll):
        """Sample roster totals 251,012.50."""
        assert calculate_payroll_total(payroll, 0.30) == pytest.approx(251_012.5)

    def test_invalid_line_type_rejected(self):
        """Unknown line types raise ValueError."""
        with pytest.raises(ValueError):
            PayrollRow("Intern", "volunteer")


class TestCalculateOpex:
    """Tests for the total operating expense build-up."""

    def test_category_totals(self, one_pager):
        """Per-unit rates scale by unit count."""
        totals = calculate_category_totals(one_pager, 120)

        assert totals["opex_utilities"] == pytest.approx(72_000.0)
        assert totals["opex_insurance"] == pytest.approx(54_000.0)
        assert sum(totals.values()) == pytest.approx(330_000.0)

    def test_sample_opex(self, one_pager, payroll):
        """Categories + payroll + fee + tax."""
        opex = calculate_opex(one_pager, 120, 2_662_776.0, payroll, 655_000.0)

        assert opex.opex_categories_total == pytest.approx(330_000.0)
        assert opex.payroll_total == pytest.approx(251_012.5)
        assert opex.mgmt_fee_total == pytest.approx(79_883.28)
        assert opex.property_tax_total == pytest.approx(655_000.0)
        assert opex.total_opex == pytest.approx(1_315_895.78)
        assert opex.opex_per_unit == pytest.approx(1_315_895.78 / 120)
        assert opex.opex_ratio == pytest.approx(1_315_895.78 / 2_662_776.0)

    def test_mgmt_fee_on_net_revenue(self, one_pager):
        """Management fee tracks net revenue."""
        low = calculate_opex(one_pager, 0, 1_000_000.0, [], 0.0)
        high = calculate_opex(one_pager, 0, 2_000_000.0, [], 0.0)

        assert low.mgmt_fee_total == pytest.approx(30_000.0)
        assert high.mgmt_fee_total == pytest.approx(60_000.0)

    def test_no_revenue_ratio(self, one_pager):
        """OpEx ratio is zero when net revenue is zero."""
        opex = calculate_opex(replace(one_pager, mgmt_fee_pct=0.0), 10, 0.0, [], 0.0)
        assert opex.total_opex == pytest.approx(27_500.0)
        assert opex.opex_ratio == 0.0

    def test_idempotent(self, one_pager, payroll):
        """Repeated calls with the same inputs give equal results."""
        first = calculate_opex(one_pager, 120, 2_662_776.0, payroll, 655_000.0)
        second = calculate_opex(one_pager, 120, 2_662_776.0, payroll, 655_000.0)
        assert first == second
