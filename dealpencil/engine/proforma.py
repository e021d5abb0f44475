"""Pro forma orchestrator: composes the engine sub-modules into a full analysis.

Pure computation. No I/O. DealParameters in, CalculationResults out.
Degenerate inputs (zero price, zero amortization, ...) come back as NaN / inf
metrics rather than exceptions.
"""

from dealpencil.models.deal import DealParameters
from dealpencil.models.results import CalculationResults, LoanState, YearlyProjection

from dealpencil.engine.debt import (
    AmortizationSchedule,
    amortization_schedule,
    monthly_payment,
    yearly_debt_summary,
)
from dealpencil.engine.cashflow import (
    add_sale_proceeds,
    annual_debt_service,
    break_even_occupancy,
    cap_rate,
    cash_on_cash,
    dscr,
    exit_value,
    project_cash_flows,
    rehab_vacancy_factor,
)
from dealpencil.engine.irr import compute_equity_multiple, npv, solve_irr
from dealpencil.engine.numeric import power

# Fixed hurdle for NPV; not user-configurable.
NPV_DISCOUNT_RATE = 0.10


def loan_state(params: DealParameters) -> LoanState:
    pmt = monthly_payment(params.loan_amount, params.interest_rate, params.amortization)
    return LoanState(
        loan_amount=params.loan_amount,
        equity_investment=params.equity_investment,
        monthly_payment=pmt,
        annual_debt_service=pmt * 12,
    )


def _yearly_projections(
    params: DealParameters,
    loan: LoanState,
    cash_flows: tuple[float, ...],
    schedule: AmortizationSchedule,
) -> tuple[YearlyProjection, ...]:
    """Per-year breakdown of the operating cash flows (index 1.. of cash_flows)."""
    balances = [y["ending_balance"] for y in yearly_debt_summary(schedule)]

    projections = []
    for year in range(1, params.holding_period + 1):
        noi = params.annual_noi * power(1 + params.noi_growth_rate / 100, year - 1)
        vacancy_loss = 0.0
        capex = 0.0
        if year == 1:
            vacancy_loss = noi * (1 - rehab_vacancy_factor(params.rehab_period, params.rehab_vacancy))
            capex = params.capex_year1
        elif year == 2:
            capex = params.capex_year2

        projections.append(YearlyProjection(
            year=year,
            noi=noi,
            rehab_vacancy_loss=vacancy_loss,
            capex=capex,
            debt_service=annual_debt_service(
                year,
                params.io_period,
                loan.monthly_payment,
                loan.loan_amount,
                params.interest_rate,
            ),
            cash_flow=cash_flows[year],
            loan_balance=balances[year - 1] if year <= len(balances) else float("nan"),
        ))
    return tuple(projections)


def run_underwriting(params: DealParameters) -> CalculationResults:
    """Run the complete underwriting analysis for one deal."""
    loan = loan_state(params)

    # Year 1
    operating_expenses = params.annual_noi * params.operating_expense_ratio / 100
    effective_gross_income = params.annual_noi + operating_expenses
    year1_noi = params.annual_noi
    year1_cash_flow = params.annual_noi

    # Exit
    sale_price = exit_value(
        params.annual_noi, params.noi_growth_rate, params.holding_period, params.exit_cap_rate
    )
    schedule = amortization_schedule(
        loan.loan_amount,
        params.interest_rate,
        params.amortization,
        params.holding_period,
        params.io_period,
    )
    loan_payoff = schedule.ending_balance if schedule.payments else max(0.0, loan.loan_amount)
    selling_costs = sale_price * params.selling_costs / 100
    net_sale_proceeds = sale_price - loan_payoff - selling_costs

    # Cash flows
    operating_cfs = project_cash_flows(
        year1_cash_flow=year1_cash_flow,
        noi_growth_rate=params.noi_growth_rate,
        holding_period=params.holding_period,
        capex_year1=params.capex_year1,
        capex_year2=params.capex_year2,
        rehab_period=params.rehab_period,
        rehab_vacancy=params.rehab_vacancy,
        io_period=params.io_period,
        monthly_debt_service=loan.monthly_payment,
        loan_amount=loan.loan_amount,
        interest_rate=params.interest_rate,
    )
    cash_flows = add_sale_proceeds(operating_cfs, net_sale_proceeds)

    irr = solve_irr(cash_flows)

    return CalculationResults(
        loan_amount=loan.loan_amount,
        equity_investment=loan.equity_investment,
        monthly_payment=loan.monthly_payment,
        annual_debt_service=loan.annual_debt_service,
        year1_noi=year1_noi,
        year1_cash_flow=year1_cash_flow,
        effective_gross_income=effective_gross_income,
        operating_expenses=operating_expenses,
        exit_value=sale_price,
        remaining_loan_balance=loan_payoff,
        selling_costs=selling_costs,
        net_sale_proceeds=net_sale_proceeds,
        irr=irr.rate,
        irr_converged=irr.converged,
        irr_iterations=irr.iterations,
        npv=npv(cash_flows, NPV_DISCOUNT_RATE),
        cash_on_cash=cash_on_cash(year1_cash_flow, loan.equity_investment),
        dscr=dscr(params.annual_noi, loan.annual_debt_service),
        equity_multiple=compute_equity_multiple(cash_flows),
        break_even_occupancy=break_even_occupancy(
            loan.annual_debt_service, operating_expenses, effective_gross_income
        ),
        cap_rate=cap_rate(params.annual_noi, params.purchase_price),
        projected_cash_flows=cash_flows,
        yearly_projections=_yearly_projections(params, loan, operating_cfs, schedule),
    )
