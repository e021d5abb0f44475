"""Cash flow projection and operating ratios: cap rate, CoC return, DSCR.

Pure functions: floats in, floats out. No I/O.

Percent-denominated inputs (growth, rates, vacancy) are whole percentages.
"""

from dealpencil.engine.numeric import divide, power


def rehab_vacancy_factor(rehab_period: float, rehab_vacancy: float) -> float:
    """Linear year-1 income drag: 1 - (months / 12) * vacancy%.

    Not prorated occupancy; a 6-month rehab at 50% vacancy keeps 75% of income.
    """
    if rehab_period <= 0:
        return 1.0
    return 1 - (rehab_period / 12) * (rehab_vacancy / 100)


def annual_debt_service(
    year: int,
    io_period: float,
    monthly_debt_service: float,
    loan_amount: float,
    interest_rate: float,
) -> float:
    """Debt service paid in a projection year (1-indexed).

    Interest-only years pay loan_amount * rate; later years pay twelve
    full-term payments.
    """
    if year <= io_period:
        return loan_amount * (interest_rate / 100)
    return monthly_debt_service * 12


def project_cash_flows(
    year1_cash_flow: float,
    noi_growth_rate: float,
    holding_period: int,
    capex_year1: float,
    capex_year2: float,
    rehab_period: float,
    rehab_vacancy: float,
    io_period: float,
    monthly_debt_service: float,
    loan_amount: float,
    interest_rate: float,
) -> tuple[float, ...]:
    """Signed cash flow series for the hold.

    Index 0 is the initial outlay (-loan_amount); indices 1..holding_period are
    yearly cash flow after capex and debt service. Sale proceeds are not
    included; see add_sale_proceeds().
    """
    cash_flows = [-loan_amount]

    for year in range(1, holding_period + 1):
        year_cash_flow = year1_cash_flow * power(1 + noi_growth_rate / 100, year - 1)

        if year == 1:
            year_cash_flow *= rehab_vacancy_factor(rehab_period, rehab_vacancy)
            year_cash_flow -= capex_year1
        elif year == 2:
            year_cash_flow -= capex_year2

        year_cash_flow -= annual_debt_service(
            year, io_period, monthly_debt_service, loan_amount, interest_rate
        )
        cash_flows.append(year_cash_flow)

    return tuple(cash_flows)


def add_sale_proceeds(cash_flows: tuple[float, ...], proceeds: float) -> tuple[float, ...]:
    """Return a copy of cash_flows with proceeds added to the final entry only."""
    if not cash_flows:
        return cash_flows
    return cash_flows[:-1] + (cash_flows[-1] + proceeds,)


def exit_value(annual_noi: float, noi_growth_rate: float, holding_period: int, exit_cap_rate: float) -> float:
    """Sale price: NOI grown through the hold, capitalized at the exit cap rate."""
    exit_noi = annual_noi * power(1 + noi_growth_rate / 100, holding_period)
    return divide(exit_noi, exit_cap_rate / 100)


def cap_rate(annual_noi: float, purchase_price: float) -> float:
    """Cap rate (%) = NOI / purchase price."""
    return divide(annual_noi, purchase_price) * 100


def cash_on_cash(year1_cash_flow: float, equity_investment: float) -> float:
    """Cash-on-cash return (%) = year 1 cash flow / equity invested."""
    return divide(year1_cash_flow, equity_investment) * 100


def dscr(noi_amount: float, annual_debt_service_amount: float) -> float:
    """Debt Service Coverage Ratio = NOI / annual debt service."""
    return divide(noi_amount, annual_debt_service_amount)


def break_even_occupancy(
    annual_debt_service_amount: float,
    operating_expenses: float,
    effective_gross_income: float,
) -> float:
    """Occupancy (as a fraction) at which income covers debt service and expenses."""
    return divide(annual_debt_service_amount + operating_expenses, effective_gross_income)
