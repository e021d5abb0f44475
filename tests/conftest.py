"""Canonical test fixtures used across all engine tests.

Fixture: $1.75M stabilized asset, $300K NOI, 75% LTV, 6.5% rate, 25yr amortization,
5-year hold (years, not months), 6% exit cap, 4% selling costs.
"""

import pytest

from dealpencil.models.deal import DealParameters


@pytest.fixture
def canonical_params() -> DealParameters:
    """The calculator's default deal."""
    return DealParameters(
        purchase_price=1_750_000,
        annual_noi=300_000,
        noi_growth_rate=2,
        holding_period=5,
        exit_cap_rate=6,
        ltv=75,
        interest_rate=6.5,
        amortization=25,
        operating_expense_ratio=40,
        io_period=0,
        capex_year1=0,
        capex_year2=0,
        rehab_period=0,
        rehab_vacancy=0,
        selling_costs=4,
    )


@pytest.fixture
def value_add_params() -> DealParameters:
    """Same asset with 2 years interest-only, capex and a 6-month rehab."""
    return DealParameters(
        purchase_price=1_750_000,
        annual_noi=300_000,
        noi_growth_rate=3,
        holding_period=7,
        exit_cap_rate=6.5,
        ltv=70,
        interest_rate=7,
        amortization=30,
        operating_expense_ratio=45,
        io_period=2,
        capex_year1=75_000,
        capex_year2=40_000,
        rehab_period=6,
        rehab_vacancy=50,
        selling_costs=3,
    )
