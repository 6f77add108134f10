"""Tests for revenue calculations."""

import pytest

from underwriting.calculations.revenue import calculate_revenue


class TestCalculateRevenue:
    """Tests for GPR to net revenue."""

    def test_sample_revenue(self):
        """Vacancy applies to GPR plus other income."""
        rev = calculate_revenue(2_791_200, 50.0, 120, 0.07)

        assert rev.other_income == pytest.approx(72_000.0)
        assert rev.gross_potential_revenue == pytest.approx(2_863_200.0)
        assert rev.vacancy_loss == pytest.approx(200_424.0)
        assert rev.net_revenue == pytest.approx(2_662_776.0)

    def test_zero_vacancy(self):
        """Zero vacancy passes gross revenue through."""
        rev = calculate_revenue(1_000_000, 0.0, 50, 0.0)
        assert rev.vacancy_loss == 0.0
        assert rev.net_revenue == pytest.approx(1_000_000.0)

    def test_full_vacancy(self):
        """100% vacancy wipes out revenue."""
        rev = calculate_revenue(1_000_000, 25.0, 50, 1.0)
        assert rev.net_revenue == pytest.approx(0.0)

    def test_rates_not_clamped(self):
        """Out-of-range vacancy is used as given."""
        rev = calculate_revenue(1_000_000, 0.0, 50, 1.5)
        assert rev.net_revenue == pytest.approx(-500_000.0)

    def test_other_income_scales_with_units(self):
        """Other income is rate x units x 12."""
        assert calculate_revenue(0, 40.0, 10, 0.0).other_income == pytest.approx(4_800.0)
        assert calculate_revenue(0, 40.0, 20, 0.0).other_income == pytest.approx(9_600.0)

    def test_idempotent(self):
        """Repeated calls with the same inputs give equal results."""
        assert calculate_revenue(2_791_200, 50.0, 120, 0.07) == calculate_revenue(2_791_200, 50.0, 120, 0.07)
