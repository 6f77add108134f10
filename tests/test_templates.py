"""Tests for data model templates and new one-pager creation."""

import pytest

from underwriting.models import (
    DataModelTemplate,
    PayrollDefault,
    PayrollLineType,
    OnePager,
    create_one_pager,
    DEFAULT_RENT_STEPS,
)


@pytest.fixture
def garden_template():
    """Garden walk-up template with a small payroll roster."""
    return DataModelTemplate(
        name="Garden - Southeast",
        product_type="garden",
        region="Southeast",
        default_hard_cost_per_nrsf=210.0,
        default_vacancy_rate=0.06,
        default_opex_insurance=500.0,
        default_tax_mil_rate=18.5,
        payroll_defaults=(
            PayrollDefault("Maintenance Tech", headcount=2, base_compensation=52_000, sort_order=1),
            PayrollDefault("Community Manager", headcount=1, base_compensation=78_000, bonus_pct=0.1, sort_order=0),
            PayrollDefault("Pest Control", "contract", fixed_amount=6_000, sort_order=2),
        ),
    )


class TestCreateOnePager:
    """Tests for one-pager creation."""

    def test_without_template(self):
        """No template gives the standard defaults."""
        op = create_one_pager("Base Case")

        assert op == OnePager(name="Base Case")
        assert op.efficiency_ratio == 0.85
        assert op.vacancy_rate == 0.07
        assert op.soft_cost_pct == 0.30
        assert op.mgmt_fee_pct == 0.03
        assert op.payroll_burden_pct == 0.30
        assert op.tax_assessed_pct_soft == 1.0
        assert op.sensitivity_rent_steps == DEFAULT_RENT_STEPS

    def test_with_template(self, garden_template):
        """Template defaults seed the assumptions."""
        op = create_one_pager("Garden Base", template=garden_template)

        assert op.name == "Garden Base"
        assert op.hard_cost_per_nrsf == 210.0
        assert op.vacancy_rate == 0.06
        assert op.opex_insurance == 500.0
        assert op.tax_mil_rate == 18.5
        assert op.land_cost == 0.0
        assert op.use_detailed_soft_costs is False

    def test_assumption_keys_are_fields(self, garden_template):
        """Every template default maps to a one-pager field."""
        keys = set(garden_template.assumptions())
        assert keys <= set(OnePager.__dataclass_fields__)
        assert "hard_cost_per_nrsf" in keys
        assert "name" not in keys


class TestPayrollDefaults:
    """Tests for template payroll rows."""

    def test_rows_sorted(self, garden_template):
        """Rows come back in sort order."""
        rows = garden_template.payroll_rows()
        assert [r.role_name for r in rows] == ["Community Manager", "Maintenance Tech", "Pest Control"]

    def test_line_type_coerced(self, garden_template):
        """String line types become enum members."""
        rows = garden_template.payroll_rows()
        assert rows[2].line_type is PayrollLineType.CONTRACT
        assert rows[2].fixed_amount == 6_000

    def test_no_defaults(self):
        """Templates without payroll give no rows."""
        assert DataModelTemplate(name="Bare", product_type="garden").payroll_rows() == []
