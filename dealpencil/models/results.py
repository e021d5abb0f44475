from dataclasses import dataclass, field
from enum import Enum

from dealpencil.engine.numeric import is_finite


@dataclass(frozen=True)
class LoanState:
    loan_amount: float
    equity_investment: float
    monthly_payment: float
    annual_debt_service: float


@dataclass(frozen=True)
class YearlyProjection:
    year: int
    noi: float = 0.0
    rehab_vacancy_loss: float = 0.0
    capex: float = 0.0
    debt_service: float = 0.0
    cash_flow: float = 0.0  # After debt service, before sale proceeds
    loan_balance: float = 0.0  # End of year


@dataclass(frozen=True)
class CalculationResults:
    # Financing
    loan_amount: float = 0.0
    equity_investment: float = 0.0
    monthly_payment: float = 0.0
    annual_debt_service: float = 0.0

    # Year 1 operations
    year1_noi: float = 0.0
    year1_cash_flow: float = 0.0
    effective_gross_income: float = 0.0
    operating_expenses: float = 0.0

    # Exit
    exit_value: float = 0.0
    remaining_loan_balance: float = 0.0
    selling_costs: float = 0.0
    net_sale_proceeds: float = 0.0

    # Returns
    irr: float = 0.0  # %
    irr_converged: bool = False
    irr_iterations: int = 0
    npv: float = 0.0  # At 10%
    cash_on_cash: float = 0.0  # %
    dscr: float = 0.0
    equity_multiple: float = 0.0
    break_even_occupancy: float = 0.0  # Fraction, not %
    cap_rate: float = 0.0  # %

    projected_cash_flows: tuple[float, ...] = ()
    yearly_projections: tuple[YearlyProjection, ...] = field(default_factory=tuple)

    @property
    def is_finite(self) -> bool:
        """False when a degenerate input left a headline metric NaN or infinite."""
        return is_finite(
            self.irr,
            self.npv,
            self.cash_on_cash,
            self.dscr,
            self.equity_multiple,
            self.break_even_occupancy,
            self.cap_rate,
        )


class DealStatus(str, Enum):
    GOOD = "good"
    MODERATE = "moderate"
    POOR = "poor"


@dataclass(frozen=True)
class DealAssessment:
    status: DealStatus
    message: str
    strengths: tuple[str, ...] = ()
    weaknesses: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()
