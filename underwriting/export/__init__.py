"""Export module for one-pager workbooks."""

from .excel_report import (
    ExcelReportConfig,
    generate_one_pager_excel,
)

__all__ = [
    "ExcelReportConfig",
    "generate_one_pager_excel",
]
