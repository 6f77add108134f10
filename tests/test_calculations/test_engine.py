"""Tests for the unified calculation engine."""

import math
from dataclasses import replace, fields

import pytest

from underwriting.calculations import CalculationInput, CalculationResults, calculate_all


class TestCalculateAll:
    """End-to-end tests on the sample one-pager."""

    def test_sample_results(self, calc_input):
        """Sample one-pager reproduces the hand-checked figures."""
        r = calculate_all(calc_input)

        assert r.total_units == 120
        assert r.total_nrsf == pytest.approx(100_000.0)
        assert r.total_gbsf == pytest.approx(117_647.06, abs=0.01)
        assert r.gross_potential_rent == pytest.approx(2_791_200.0)
        assert r.net_revenue == pytest.approx(2_662_776.0)
        assert r.total_budget == pytest.approx(36_500_000.0)
        assert r.property_tax_total == pytest.approx(655_000.0)
        assert r.payroll_total == pytest.approx(251_012.5)
        assert r.total_opex == pytest.approx(1_315_895.78)
        assert r.noi == pytest.approx(1_346_880.22)
        assert r.unlevered_yield_on_cost == pytest.approx(0.0369008, rel=1e-5)

    def test_site_and_density(self, calc_input):
        """Three acres at 120 units is 40 units/acre."""
        r = calculate_all(calc_input)

        assert r.site_area_acres == pytest.approx(3.0)
        assert r.density_units_per_acre == pytest.approx(40.0)
        assert r.recommended_units_low == pytest.approx(90.0)
        assert r.recommended_units_high == pytest.approx(135.0)

    def test_no_site_area(self, calc_input):
        """Missing site area zeroes density without affecting returns."""
        base = calculate_all(calc_input)
        r = calculate_all(replace(calc_input, site_area_sf=0.0))

        assert r.density_units_per_acre == 0.0
        assert r.land_cost_per_sf == 0.0
        assert r.noi == base.noi

    def test_idempotent(self, calc_input):
        """Same input, same output."""
        assert calculate_all(calc_input) == calculate_all(calc_input)

    def test_inputs_not_mutated(self, calc_input):
        """The engine leaves its input untouched."""
        before = replace(calc_input)
        calculate_all(calc_input)
        assert calc_input == before

    def test_soft_cost_modes_exclusive(self, calc_input):
        """Detailed mode uses the line items, percent mode ignores them."""
        pct = calculate_all(calc_input)
        detailed = calculate_all(
            replace(calc_input, one_pager=replace(calc_input.one_pager, use_detailed_soft_costs=True))
        )
        no_details = calculate_all(replace(calc_input, soft_cost_details=()))

        assert pct.soft_cost == pytest.approx(7_500_000.0)
        assert no_details.soft_cost == pct.soft_cost
        assert detailed.soft_cost == pytest.approx(6_750_000.0)
        assert detailed.soft_cost_pct_display == pytest.approx(0.27)

    def test_mill_rate_only_moves_opex(self, calc_input):
        """Mill rate changes opex and NOI but not revenue or hard cost."""
        base = calculate_all(calc_input)
        higher = calculate_all(
            replace(calc_input, one_pager=replace(calc_input.one_pager, tax_mil_rate=30.0))
        )

        assert higher.net_revenue == base.net_revenue
        assert higher.hard_cost == base.hard_cost
        assert higher.total_budget == base.total_budget
        assert higher.property_tax_total == pytest.approx(982_500.0)
        assert higher.total_opex == pytest.approx(base.total_opex + 327_500.0)
        assert higher.noi < base.noi

    def test_losing_deal(self, calc_input):
        """Opex above revenue yields negative NOI and YOC."""
        op = replace(calc_input.one_pager, opex_insurance=25_000.0)
        r = calculate_all(replace(calc_input, one_pager=op))

        assert r.noi < 0
        assert r.unlevered_yield_on_cost < 0

    def test_accepts_lists(self, unit_mix, payroll, soft_costs, one_pager):
        """Child rows passed as lists are stored as tuples."""
        calc_input = CalculationInput(one_pager, unit_mix, payroll, soft_costs)
        assert isinstance(calc_input.unit_mix, tuple)
        assert calculate_all(calc_input).total_units == 120


class TestZeroInput:
    """An empty one-pager must render as zeros, never NaN or Infinity."""

    def test_all_zero_and_finite(self, zero_input):
        """Every result is 0 and finite."""
        r = calculate_all(zero_input)

        for f in fields(r):
            value = getattr(r, f.name)
            assert math.isfinite(value), f.name
            assert value == 0, f.name

    def test_matches_empty(self, zero_input):
        """Zero input equals the empty placeholder results."""
        assert calculate_all(zero_input) == CalculationResults.empty()

    def test_default_one_pager_no_rows(self):
        """A fresh one-pager with no unit mix has no revenue or units."""
        from underwriting.models import OnePager

        r = calculate_all(CalculationInput(OnePager(name="New")))
        assert r.total_units == 0
        assert r.net_revenue == 0.0
        assert r.unlevered_yield_on_cost == 0.0
        assert all(math.isfinite(v) for v in r.to_dict().values())


class TestCalculationResults:
    """Tests for result helpers."""

    def test_to_dict(self, calc_input):
        """to_dict carries every field."""
        r = calculate_all(calc_input)
        d = r.to_dict()

        assert set(d) == {f.name for f in fields(CalculationResults)}
        assert d["noi"] == r.noi

    def test_summary_columns(self, calc_input):
        """Summary columns mirror the matching result fields."""
        r = calculate_all(calc_input)
        summary = r.summary_columns()

        assert summary["calc_total_budget"] == r.total_budget
        assert summary["calc_yoc"] == r.unlevered_yield_on_cost
        assert summary["calc_gpr"] == r.gross_potential_rent
        assert all(key.startswith("calc_") for key in summary)
