"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tests.fixtures.test_inputs import (
    get_sample_one_pager,
    get_sample_unit_mix,
    get_sample_payroll,
    get_sample_soft_costs,
    get_sample_calc_input,
    get_zero_calc_input,
)


@pytest.fixture
def one_pager():
    """Get the sample base case assumptions."""
    return get_sample_one_pager()


@pytest.fixture
def unit_mix():
    """Get the sample unit mix rows."""
    return get_sample_unit_mix()


@pytest.fixture
def payroll():
    """Get the sample payroll roster."""
    return get_sample_payroll()


@pytest.fixture
def soft_costs():
    """Get the sample itemized soft costs."""
    return get_sample_soft_costs()


@pytest.fixture
def calc_input():
    """Get the full sample calculation input."""
    return get_sample_calc_input()


@pytest.fixture
def zero_input():
    """Get the all-zero calculation input."""
    return get_zero_calc_input()
