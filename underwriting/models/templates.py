"""Data model templates that seed new one-pagers with default assumptions."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .lookups import PayrollLineType
from .one_pager import OnePager, PayrollRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayrollDefault:
    """Payroll line copied onto every one-pager created from a template."""

    role_name: str
    line_type: PayrollLineType = PayrollLineType.EMPLOYEE
    headcount: float = 0.0
    base_compensation: float = 0.0
    bonus_pct: float = 0.0
    fixed_amount: float = 0.0
    sort_order: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "line_type", PayrollLineType(self.line_type))


@dataclass(frozen=True)
class DataModelTemplate:
    """Default assumptions for a product type (and optionally a region).

    Only the fields a user can default are carried here. Land cost, unit mix
    and detailed soft costs are always site specific.
    """

    name: str
    product_type: str
    region: Optional[str] = None

    default_efficiency_ratio: float = 0.85
    default_other_income_per_unit_month: float = 0.0
    default_vacancy_rate: float = 0.07
    default_hard_cost_per_nrsf: float = 0.0
    default_soft_cost_pct: float = 0.30
    default_opex_utilities: float = 0.0
    default_opex_repairs_maintenance: float = 0.0
    default_opex_contract_services: float = 0.0
    default_opex_marketing: float = 0.0
    default_opex_general_admin: float = 0.0
    default_opex_turnover: float = 0.0
    default_opex_misc: float = 0.0
    default_opex_insurance: float = 0.0
    default_mgmt_fee_pct: float = 0.03
    default_payroll_burden_pct: float = 0.30
    default_tax_mil_rate: float = 0.0
    default_tax_assessed_pct_hard: float = 1.0
    default_tax_assessed_pct_land: float = 1.0
    default_tax_assessed_pct_soft: float = 1.0

    payroll_defaults: Tuple[PayrollDefault, ...] = field(default_factory=tuple)

    def assumptions(self) -> Dict[str, float]:
        """Map template defaults onto OnePager field names.

        Returns:
            Dict keyed by OnePager field (``default_`` prefix stripped).
        """
        prefix = "default_"
        return {
            name[len(prefix):]: value
            for name, value in vars(self).items()
            if name.startswith(prefix)
        }

    def payroll_rows(self) -> List[PayrollRow]:
        """Build fresh payroll rows from the template's payroll defaults."""
        return [
            PayrollRow(
                role_name=payroll_default.role_name,
                line_type=payroll_default.line_type,
                headcount=payroll_default.headcount,
                base_compensation=payroll_default.base_compensation,
                bonus_pct=payroll_default.bonus_pct,
                fixed_amount=payroll_default.fixed_amount,
                sort_order=payroll_default.sort_order,
            )
            for payroll_default in sorted(self.payroll_defaults, key=lambda p: p.sort_order)
        ]


def create_one_pager(name: str, template: Optional[DataModelTemplate] = None) -> OnePager:
    """Create a new one-pager, applying template defaults when given.

    Land cost starts at zero, detailed soft costs are off and the sensitivity
    steps take the standard arrays regardless of template.

    Args:
        name: One-pager name.
        template: Optional data model template.

    Returns:
        A new OnePager.

    Example:
        >>> op = create_one_pager("Base Case", template=garden_template)
        >>> op.hard_cost_per_nrsf
        210.0
    """
    if template is None:
        return OnePager(name=name)

    logger.debug("Creating one-pager %r from template %r", name, template.name)
    return OnePager(name=name, **template.assumptions())
