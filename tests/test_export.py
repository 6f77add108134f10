"""Tests for the one-pager Excel export."""

import io
from dataclasses import replace

import pytest
from openpyxl import load_workbook

from underwriting.calculations import calculate_all, run_sensitivity_suite
from underwriting.export import ExcelReportConfig, generate_one_pager_excel


@pytest.fixture
def results(calc_input):
    return calculate_all(calc_input)


@pytest.fixture
def analysis(calc_input):
    return run_sensitivity_suite(
        calc_input.one_pager, calc_input.unit_mix, calc_input.payroll, calc_input.soft_cost_details
    )


def _load(data: bytes):
    return load_workbook(io.BytesIO(data))


class TestGenerateOnePagerExcel:
    """Tests for workbook generation."""

    def test_all_sheets(self, one_pager, results, unit_mix, payroll, analysis):
        """Full export has every sheet in order."""
        data = generate_one_pager_excel(
            one_pager, results, unit_mix=unit_mix, payroll=payroll, sensitivity=analysis,
            config=ExcelReportConfig(pursuit_name="Sample Pursuit"),
        )
        wb = _load(data)

        assert wb.sheetnames == ["Summary", "Unit Mix", "Payroll", "Sensitivity"]

    def test_summary_values(self, one_pager, results):
        """Summary writes raw numbers next to their labels."""
        wb = _load(generate_one_pager_excel(one_pager, results))
        ws = wb["Summary"]

        assert ws["A1"].value == "Base Case"
        labels = {row[0].value: row[1].value for row in ws.iter_rows(min_row=2) if row[0].value}
        assert labels["Total Budget"] == pytest.approx(36_500_000.0)
        assert labels["Net Revenue"] == pytest.approx(2_662_776.0)
        assert labels["Unlevered Yield on Cost"] == pytest.approx(results.unlevered_yield_on_cost)

    def test_unit_mix_skips_placeholders(self, one_pager, results, unit_mix):
        """Only active unit types are listed."""
        ws = _load(generate_one_pager_excel(one_pager, results, unit_mix=unit_mix))["Unit Mix"]
        types = [ws.cell(row=r, column=1).value for r in range(2, ws.max_row + 1)]

        assert types == ["Studio", "1BR", "2BR"]

    def test_payroll_total(self, one_pager, results, payroll):
        """Payroll sheet ends with the burdened total."""
        ws = _load(generate_one_pager_excel(one_pager, results, payroll=payroll))["Payroll"]
        assert ws.cell(row=ws.max_row, column=7).value == pytest.approx(251_012.5)

    def test_optional_sheets_omitted(self, one_pager, results):
        """Sheets without data are left out."""
        wb = _load(generate_one_pager_excel(one_pager, results))
        assert wb.sheetnames == ["Summary"]

    def test_no_sheets_raises(self, one_pager, results):
        """Disabling everything is an error."""
        config = ExcelReportConfig(include_summary=False)
        with pytest.raises(ValueError):
            generate_one_pager_excel(one_pager, results, config=config)

    def test_sensitivity_sheet(self, one_pager, results, analysis):
        """Sensitivity sheet carries the sweeps and the matrix."""
        ws = _load(generate_one_pager_excel(one_pager, results, sensitivity=analysis))["Sensitivity"]
        titles = [c.value for c in ws["A"] if isinstance(c.value, str)]

        assert "Rent Sensitivity" in titles
        assert "Hard Cost Sensitivity" in titles
        assert "Land Cost Sensitivity" in titles
        assert any(t.startswith("Yield on Cost") for t in titles)

    def test_wide_sensitivity_matrix(self, calc_input, results):
        """Matrices wider than 26 columns export past column Z."""
        op = replace(calc_input.one_pager, sensitivity_hard_cost_steps=tuple(range(-15, 16)))
        analysis = run_sensitivity_suite(
            op, calc_input.unit_mix, calc_input.payroll, calc_input.soft_cost_details
        )
        ws = _load(generate_one_pager_excel(op, results, sensitivity=analysis))["Sensitivity"]

        assert analysis.matrix.shape == (7, 31)
        assert ws.max_column == 32
