"""One-pager Excel export.

Builds a formatted workbook from a one-pager, its CalculationResults and
(optionally) its sensitivity analysis. Values are written as numbers with
Excel number formats; rounding happens only in the display format.
"""

import io
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils.dataframe import dataframe_to_rows
from openpyxl.utils import get_column_letter

from ..models.lookups import OPEX_CATEGORIES, PayrollLineType
from ..models.one_pager import OnePager, UnitMixRow, PayrollRow
from ..calculations.engine import CalculationResults
from ..calculations.units import calculate_unit_mix_row, get_active_rows
from ..calculations.opex import calculate_payroll_row_total
from ..calculations.sensitivity import SensitivityAnalysis, SensitivityRow, sensitivity_to_dataframe

FMT_USD = '"$"#,##0'
FMT_USD_CENTS = '"$"#,##0.00'
FMT_NUM = "#,##0"
FMT_NUM_1 = "#,##0.0"
FMT_PCT = "0.0%"
FMT_PCT_2 = "0.00%"
FMT_MILL = "0.0000"

HEADER_FILL = PatternFill(start_color="1A1F2B", end_color="1A1F2B", fill_type="solid")
SECTION_FILL = PatternFill(start_color="F4F5F7", end_color="F4F5F7", fill_type="solid")
BASE_CASE_FILL = PatternFill(start_color="DBEAFE", end_color="DBEAFE", fill_type="solid")
THIN_BOTTOM = Border(bottom=Side(style="thin", color="E2E5EA"))
TOTAL_BORDER = Border(top=Side(style="medium", color="E2E5EA"), bottom=Side(style="medium", color="E2E5EA"))


@dataclass
class ExcelReportConfig:
    """Configuration for one-pager workbook generation."""
    include_summary: bool = True
    include_unit_mix: bool = True
    include_payroll: bool = True
    include_sensitivity: bool = True
    pursuit_name: str = ""
    product_type_name: str = ""


def _add_header_style(ws, row: int, cols: int) -> None:
    """Apply header styling to a row."""
    for col in range(1, cols + 1):
        cell = ws.cell(row=row, column=col)
        cell.fill = HEADER_FILL
        cell.font = Font(color="FFFFFF", bold=True, size=10)
        cell.alignment = Alignment(horizontal="center")


def _add_section_header(ws, title: str, row: int) -> int:
    """Add a shaded section header and return next row."""
    row += 1
    ws.cell(row=row, column=1, value=title)
    for col in (1, 2):
        ws.cell(row=row, column=col).fill = SECTION_FILL
    ws.cell(row=row, column=1).font = Font(bold=True, color="7A8599", size=9)
    return row + 1


def _add_metric_row(ws, row: int, label: str, value: float, fmt: str, total: bool = False) -> int:
    """Write a label/value pair and return next row."""
    ws.cell(row=row, column=1, value=label)
    cell = ws.cell(row=row, column=2, value=value)
    cell.number_format = fmt
    cell.alignment = Alignment(horizontal="right")
    for col in (1, 2):
        ws.cell(row=row, column=col).border = TOTAL_BORDER if total else THIN_BOTTOM
        if total:
            ws.cell(row=row, column=col).font = Font(bold=True)
    return row + 1


def generate_one_pager_excel(
    one_pager: OnePager,
    results: CalculationResults,
    unit_mix: Iterable[UnitMixRow] = (),
    payroll: Iterable[PayrollRow] = (),
    sensitivity: Optional[SensitivityAnalysis] = None,
    config: Optional[ExcelReportConfig] = None,
) -> bytes:
    """Generate the one-pager Excel workbook.

    Args:
        one_pager: Assumptions shown alongside the results.
        results: Output of calculate_all() for the same inputs.
        unit_mix: Unit mix rows (placeholders are skipped).
        payroll: Payroll roster.
        sensitivity: Optional output of run_sensitivity_suite().
        config: Optional configuration for the workbook.

    Returns:
        Excel file as bytes.

    Raises:
        ValueError: If the configuration and inputs produce no sheets.
    """
    if config is None:
        config = ExcelReportConfig()

    wb = Workbook()

    # Remove default sheet
    wb.remove(wb.active)

    if config.include_summary:
        ws = wb.create_sheet("Summary")
        _create_summary_sheet(ws, one_pager, results, config)

    active_rows = get_active_rows(unit_mix)
    if config.include_unit_mix and active_rows:
        ws = wb.create_sheet("Unit Mix")
        _create_unit_mix_sheet(ws, active_rows)

    payroll_rows = sorted(payroll, key=lambda r: r.sort_order)
    if config.include_payroll and payroll_rows:
        ws = wb.create_sheet("Payroll")
        _create_payroll_sheet(ws, payroll_rows, one_pager.payroll_burden_pct)

    if config.include_sensitivity and sensitivity is not None:
        ws = wb.create_sheet("Sensitivity")
        _create_sensitivity_sheet(ws, sensitivity)

    if not wb.worksheets:
        raise ValueError("No sheets to export - enable at least one sheet with data")

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output.getvalue()


def _create_summary_sheet(
    ws,
    one_pager: OnePager,
    results: CalculationResults,
    config: ExcelReportConfig,
) -> None:
    """Create the summary sheet."""
    row = 1

    ws.cell(row=row, column=1, value=one_pager.name or "One-Pager")
    ws.cell(row=row, column=1).font = Font(bold=True, size=14)
    row += 1

    for subtitle in (config.pursuit_name, config.product_type_name):
        if subtitle:
            ws.cell(row=row, column=1, value=subtitle)
            row += 1

    ws.cell(row=row, column=1, value=f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    ws.cell(row=row, column=1).font = Font(italic=True, color="7A8599")
    row += 1

    r = results
    sections: List[Tuple[str, List[Tuple[str, float, str, bool]]]] = [
        ("Returns", [
            ("Unlevered Yield on Cost", r.unlevered_yield_on_cost, FMT_PCT_2, False),
            ("NOI", r.noi, FMT_USD, False),
            ("NOI / Unit", r.noi_per_unit, FMT_USD, False),
        ]),
        ("Site & Density", [
            ("Site Area (Acres)", r.site_area_acres, "#,##0.00", False),
            ("Total Units", r.total_units, FMT_NUM, False),
            ("Density (Units/Acre)", r.density_units_per_acre, FMT_NUM_1, False),
            ("Efficiency Ratio", one_pager.efficiency_ratio, FMT_PCT, False),
            ("Total NRSF", r.total_nrsf, FMT_NUM, False),
            ("Total GBSF", r.total_gbsf, FMT_NUM, False),
        ]),
        ("Revenue", [
            ("Gross Potential Rent", r.gross_potential_rent, FMT_USD, False),
            ("Other Income ($/unit/mo)", one_pager.other_income_per_unit_month, FMT_USD_CENTS, False),
            ("GPR + Other Income", r.gross_potential_revenue, FMT_USD, False),
            ("Vacancy & Loss", one_pager.vacancy_rate, FMT_PCT, False),
            ("Net Revenue", r.net_revenue, FMT_USD, True),
        ]),
        ("Development Budget", [
            ("Hard Cost ($/NRSF)", one_pager.hard_cost_per_nrsf, FMT_USD_CENTS, False),
            ("Hard Cost (Total)", r.hard_cost, FMT_USD, False),
            ("Hard Cost ($/GBSF)", r.hard_cost_per_gbsf, FMT_USD_CENTS, False),
            ("Land Cost", r.land_cost, FMT_USD, False),
            ("Land $/Unit", r.land_cost_per_unit, FMT_USD, False),
            ("Soft Cost %", r.soft_cost_pct_display, FMT_PCT, False),
            ("Soft Cost (Total)", r.soft_cost, FMT_USD, False),
            ("Total Budget", r.total_budget, FMT_USD, True),
            ("Cost / Unit", r.cost_per_unit, FMT_USD, False),
            ("Cost / NRSF", r.cost_per_nrsf, FMT_USD_CENTS, False),
        ]),
        ("Operating Expenses", [
            *[(label, getattr(one_pager, name), FMT_USD, False) for name, label in OPEX_CATEGORIES],
            ("Mgmt Fee", one_pager.mgmt_fee_pct, FMT_PCT, False),
            ("Payroll", r.payroll_total, FMT_USD, False),
            ("Total OpEx", r.total_opex, FMT_USD, True),
            ("OpEx / Unit", r.opex_per_unit, FMT_USD, False),
            ("OpEx Ratio", r.opex_ratio, FMT_PCT, False),
        ]),
        ("Property Tax", [
            ("Mil Rate", one_pager.tax_mil_rate, FMT_MILL, False),
            ("Assessed Value", r.assessed_value, FMT_USD, False),
            ("Annual Property Tax", r.property_tax_total, FMT_USD, False),
            ("Tax / Unit", r.property_tax_per_unit, FMT_USD, False),
        ]),
    ]

    for title, metrics in sections:
        row = _add_section_header(ws, title, row)
        for label, value, fmt, total in metrics:
            row = _add_metric_row(ws, row, label, value, fmt, total)

    ws.column_dimensions['A'].width = 28
    ws.column_dimensions['B'].width = 22


def _create_unit_mix_sheet(ws, rows: Sequence[UnitMixRow]) -> None:
    """Create the Unit Mix sheet from active rows."""
    headers = ["Type", "# Units", "Avg SF", "Total SF", "Rent/SF", "Mo. Rent", "Annual Rev"]
    formats = [None, FMT_NUM, FMT_NUM, FMT_NUM, FMT_USD_CENTS, FMT_USD, FMT_USD]

    for col, header in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=header)
    _add_header_style(ws, 1, len(headers))

    row = 2
    for unit_row in rows:
        calc = calculate_unit_mix_row(unit_row)
        values = [
            unit_row.unit_type,
            unit_row.unit_count,
            unit_row.avg_unit_sf,
            calc.total_sf,
            calc.effective_rent_per_sf,
            calc.effective_monthly_rent,
            calc.annual_rental_revenue,
        ]
        for col, (value, fmt) in enumerate(zip(values, formats), 1):
            cell = ws.cell(row=row, column=col, value=value)
            cell.border = THIN_BOTTOM
            if fmt:
                cell.number_format = fmt
        row += 1

    widths = [18, 10, 10, 12, 10, 12, 14]
    for col, width in enumerate(widths, 1):
        ws.column_dimensions[get_column_letter(col)].width = width


def _create_payroll_sheet(ws, rows: Sequence[PayrollRow], payroll_burden_pct: float) -> None:
    """Create the Payroll sheet with burdened totals."""
    headers = ["Role", "Type", "Headcount", "Base Comp", "Bonus %", "Fixed Amount", "Total (Burdened)"]
    formats = [None, None, "0.0#", FMT_USD, FMT_PCT, FMT_USD, FMT_USD]

    for col, header in enumerate(headers, 1):
        ws.cell(row=1, column=col, value=header)
    _add_header_style(ws, 1, len(headers))

    row = 2
    total = 0.0
    for payroll_row in rows:
        is_contract = payroll_row.line_type == PayrollLineType.CONTRACT
        line_total = calculate_payroll_row_total(payroll_row, payroll_burden_pct)
        total += line_total
        values = [
            payroll_row.role_name,
            payroll_row.line_type.value,
            None if is_contract else payroll_row.headcount,
            None if is_contract else payroll_row.base_compensation,
            None if is_contract else payroll_row.bonus_pct,
            payroll_row.fixed_amount if is_contract else None,
            line_total,
        ]
        for col, (value, fmt) in enumerate(zip(values, formats), 1):
            cell = ws.cell(row=row, column=col, value=value)
            cell.border = THIN_BOTTOM
            if fmt:
                cell.number_format = fmt
        row += 1

    ws.cell(row=row, column=1, value=f"Total (burden {payroll_burden_pct:.1%})").font = Font(bold=True)
    total_cell = ws.cell(row=row, column=len(headers), value=total)
    total_cell.number_format = FMT_USD
    total_cell.font = Font(bold=True)

    widths = [24, 10, 11, 13, 9, 14, 17]
    for col, width in enumerate(widths, 1):
        ws.column_dimensions[get_column_letter(col)].width = width


def _write_sweep(ws, title: str, value_label: str, value_fmt: str, rows: List[SensitivityRow], row: int) -> int:
    """Write one sensitivity sweep table and return next free row."""
    ws.cell(row=row, column=1, value=title).font = Font(bold=True, size=12)
    row += 1

    df = sensitivity_to_dataframe(rows)
    df.columns = ["Step", value_label, "Total Budget", "GPR", "NOI", "YOC"]
    formats = ["General", value_fmt, FMT_USD, FMT_USD, FMT_USD, FMT_PCT_2]

    header_row = row
    for values in dataframe_to_rows(df, index=False, header=True):
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row, column=col, value=value)
            if row > header_row:
                cell.number_format = formats[col - 1]
                if values[0] == 0:
                    cell.fill = BASE_CASE_FILL
        row += 1
    _add_header_style(ws, header_row, len(df.columns))

    return row + 1


def _create_sensitivity_sheet(ws, analysis: SensitivityAnalysis) -> None:
    """Create the Sensitivity sheet: three sweeps and the YOC matrix."""
    row = 1
    row = _write_sweep(ws, "Rent Sensitivity", "Rent/SF", FMT_USD_CENTS, analysis.rent, row)
    row = _write_sweep(ws, "Hard Cost Sensitivity", "HC/NRSF", FMT_USD_CENTS, analysis.hard_cost, row)
    row = _write_sweep(ws, "Land Cost Sensitivity", "Land Cost", FMT_USD, analysis.land_cost, row)

    matrix = analysis.matrix
    ws.cell(row=row, column=1, value="Yield on Cost: Rent/SF Step (rows) x Hard Cost Step (columns)").font = Font(bold=True, size=12)
    row += 1

    df: pd.DataFrame = matrix.to_dataframe()
    header_row = row
    ws.cell(row=row, column=1, value="Rent \\ HC")
    for col, hc_step in enumerate(df.columns, 2):
        ws.cell(row=row, column=col, value=hc_step)
    _add_header_style(ws, header_row, len(df.columns) + 1)
    row += 1

    for i, (rent_step, values) in enumerate(df.iterrows()):
        ws.cell(row=row, column=1, value=rent_step).font = Font(bold=True)
        for j, value in enumerate(values, 2):
            cell = ws.cell(row=row, column=j, value=float(value))
            cell.number_format = FMT_PCT_2
            if i == matrix.base_rent_idx and j - 2 == matrix.base_hc_idx:
                cell.fill = BASE_CASE_FILL
                cell.font = Font(bold=True)
        row += 1

    for col in range(1, max(7, len(df.columns) + 1) + 1):
        ws.column_dimensions[get_column_letter(col)].width = 14
