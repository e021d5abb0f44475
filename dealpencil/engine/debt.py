"""Amortization schedule and loan balance computation.

Pure functions: floats in, dataclass out. No I/O.

Rates are annual nominal percentages (6.5 means 6.5%), compounded monthly.
"""

from dataclasses import dataclass

from dealpencil.engine.numeric import divide, power


@dataclass(frozen=True)
class AmortizationPayment:
    period: int
    payment: float
    principal: float
    interest: float
    balance: float
    interest_only: bool = False


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: tuple[AmortizationPayment, ...]
    monthly_payment: float
    total_interest: float
    total_principal: float

    @property
    def ending_balance(self) -> float:
        """Balance after the last simulated month, floored at zero."""
        if not self.payments:
            return float("nan")
        return max(0.0, self.payments[-1].balance)


def monthly_payment(principal: float, annual_rate_pct: float, amort_years: float) -> float:
    """Fixed monthly payment that fully amortizes the loan over amort_years."""
    n = amort_years * 12
    if annual_rate_pct == 0:
        return divide(principal, n)

    r = annual_rate_pct / 1200
    # M = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = power(1 + r, n)
    return divide(principal * r * factor, factor - 1)


def amortization_schedule(
    principal: float,
    annual_rate_pct: float,
    amort_years: float,
    elapsed_years: float,
    io_period_years: float = 0,
) -> AmortizationSchedule:
    """Simulate elapsed_years * 12 monthly payments.

    Months inside the interest-only window pay interest only: no principal is
    repaid and unpaid interest is never capitalized. After the window the
    full-term payment from monthly_payment() applies unchanged, i.e. the loan
    is not re-amortized over the remaining term.

    Balances are left unfloored so overshoot past the payoff month is
    visible; use ending_balance / remaining_balance for the floored figure.
    """
    pmt = monthly_payment(principal, annual_rate_pct, amort_years)
    r = annual_rate_pct / 1200
    n_periods = int(round(elapsed_years * 12))
    io_months = io_period_years * 12

    payments: list[AmortizationPayment] = []
    balance = principal
    total_interest = 0.0
    total_principal = 0.0

    for month in range(n_periods):
        interest = balance * r
        interest_only = month < io_months
        if interest_only:
            principal_paid = 0.0
            payment = interest
        else:
            principal_paid = pmt - interest
            payment = pmt

        balance -= principal_paid
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            period=month + 1,
            payment=payment,
            principal=principal_paid,
            interest=interest,
            balance=balance,
            interest_only=interest_only,
        ))

    return AmortizationSchedule(
        payments=tuple(payments),
        monthly_payment=pmt,
        total_interest=total_interest,
        total_principal=total_principal,
    )


def remaining_balance(
    principal: float,
    annual_rate_pct: float,
    amort_years: float,
    elapsed_years: float,
    io_period_years: float = 0,
) -> float:
    """Outstanding loan balance after elapsed_years, floored at zero.

    Same month-by-month arithmetic as amortization_schedule() without
    keeping the rows.
    """
    pmt = monthly_payment(principal, annual_rate_pct, amort_years)
    r = annual_rate_pct / 1200
    io_months = io_period_years * 12

    balance = principal
    for month in range(int(round(max(0, elapsed_years) * 12))):
        if month >= io_months:
            balance -= pmt - balance * r
    return max(0.0, balance)


def yearly_debt_summary(schedule: AmortizationSchedule) -> list[dict[str, float]]:
    """Aggregate an amortization schedule by year.

    Returns list of dicts with keys: year, principal, interest, debt_service, ending_balance
    """
    yearly: list[dict[str, float]] = []
    year_principal = 0.0
    year_interest = 0.0
    year_debt_service = 0.0

    for p in schedule.payments:
        year_principal += p.principal
        year_interest += p.interest
        year_debt_service += p.payment

        if p.period % 12 == 0 or p.period == len(schedule.payments):
            yearly.append({
                "year": (p.period - 1) // 12 + 1,
                "principal": year_principal,
                "interest": year_interest,
                "debt_service": year_debt_service,
                "ending_balance": max(0.0, p.balance),
            })
            year_principal = 0.0
            year_interest = 0.0
            year_debt_service = 0.0

    return yearly
