"""Revenue calculations from Gross Potential Rent (GPR) to net revenue."""

from dataclasses import dataclass

from ..models.lookups import MONTHS_PER_YEAR


@dataclass(frozen=True)
class RevenueResult:
    """Results of the annual revenue calculation."""

    gross_potential_rent: float
    other_income: float
    gross_potential_revenue: float  # GPR + other income
    vacancy_loss: float
    net_revenue: float


def calculate_revenue(
    gross_potential_rent: float,
    other_income_per_unit_month: float,
    total_units: int,
    vacancy_rate: float,
) -> RevenueResult:
    """Calculate annual net revenue.

    Vacancy applies to GPR plus other income:
    - Other income = rate x units x 12
    - Vacancy loss = (GPR + other income) x vacancy rate
    - Net revenue = (GPR + other income) - vacancy loss

    Rates are not range checked.

    Args:
        gross_potential_rent: Annual GPR from the unit mix.
        other_income_per_unit_month: Parking, fees, etc. per unit per month.
        total_units: Number of units.
        vacancy_rate: Vacancy and credit loss as decimal (e.g., 0.07).

    Returns:
        RevenueResult with each revenue line.
    """
    other_income = other_income_per_unit_month * total_units * MONTHS_PER_YEAR
    gross_potential_revenue = gross_potential_rent + other_income
    vacancy_loss = gross_potential_revenue * vacancy_rate

    return RevenueResult(
        gross_potential_rent=gross_potential_rent,
        other_income=other_income,
        gross_potential_revenue=gross_potential_revenue,
        vacancy_loss=vacancy_loss,
        net_revenue=gross_potential_revenue - vacancy_loss,
    )
