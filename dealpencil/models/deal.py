from dataclasses import dataclass


@dataclass(frozen=True)
class DealParameters:
    """Underwriting inputs for a single deal.

    Percentages are whole numbers (6.5 means 6.5%). holding_period and
    io_period are counted in years. The engine does not re-validate these;
    see dealpencil.api.schemas.DealRequest for the accepted ranges.
    """
    # Purchase & operations
    purchase_price: float = 1_750_000
    annual_noi: float = 300_000
    noi_growth_rate: float = 2  # %/yr
    operating_expense_ratio: float = 40  # % of NOI

    # Hold & exit
    holding_period: int = 5  # years
    exit_cap_rate: float = 6
    selling_costs: float = 4  # % of exit value

    # Financing
    ltv: float = 75
    interest_rate: float = 6.5  # Annual nominal
    amortization: float = 25  # years
    io_period: float = 0  # years, <= holding_period

    # Value-add
    capex_year1: float = 0
    capex_year2: float = 0
    rehab_period: float = 0  # months
    rehab_vacancy: float = 0  # % vacant during rehab

    @property
    def loan_amount(self) -> float:
        return self.purchase_price * self.ltv / 100

    @property
    def equity_investment(self) -> float:
        return self.purchase_price - self.loan_amount
