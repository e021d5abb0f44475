"""Display formatting shared by the report, dashboard and CLI."""

import math

NOT_AVAILABLE = "n/a"


def fmt_dollar(v: float) -> str:
    if not math.isfinite(v):
        return NOT_AVAILABLE
    return f"-${abs(v):,.0f}" if v < 0 else f"${v:,.0f}"


def fmt_pct(v: float) -> str:
    """Format a whole-number percentage (17.14 -> '17.14%')."""
    if not math.isfinite(v):
        return NOT_AVAILABLE
    return f"{v:.2f}%"


def fmt_multiple(v: float) -> str:
    return f"{v:.2f}x" if math.isfinite(v) else NOT_AVAILABLE


def fmt_ratio(v: float) -> str:
    return f"{v:.2f}" if math.isfinite(v) else NOT_AVAILABLE


def property_detail_rows(params) -> list[tuple[str, str]]:
    return [
        ("Purchase Price", fmt_dollar(params.purchase_price)),
        ("Annual NOI", fmt_dollar(params.annual_noi)),
        ("NOI Growth Rate", fmt_pct(params.noi_growth_rate)),
        ("Holding Period", f"{params.holding_period} years"),
        ("Exit Cap Rate", fmt_pct(params.exit_cap_rate)),
        ("Interest Rate", fmt_pct(params.interest_rate)),
        ("Amortization", f"{params.amortization:g} years"),
        ("Interest Only Period", f"{params.io_period:g} years"),
        ("LTV", fmt_pct(params.ltv)),
        ("Operating Expense Ratio", fmt_pct(params.operating_expense_ratio)),
        ("Selling Costs", fmt_pct(params.selling_costs)),
    ]


def key_metric_rows(results) -> list[tuple[str, str]]:
    """Headline metrics in report order. Break-even occupancy is a fraction."""
    return [
        ("Cash on Cash Return", fmt_pct(results.cash_on_cash)),
        ("Cap Rate", fmt_pct(results.cap_rate)),
        ("Equity Multiple", fmt_multiple(results.equity_multiple)),
        ("IRR", fmt_pct(results.irr)),
        ("Debt Service Coverage", fmt_ratio(results.dscr)),
        ("Break-even Occupancy", fmt_pct(results.break_even_occupancy * 100)),
        ("NPV (10%)", fmt_dollar(results.npv)),
    ]


def operating_rows(results) -> list[tuple[str, str]]:
    return [
        ("Year 1 NOI", fmt_dollar(results.year1_noi)),
        ("Year 1 Cash Flow", fmt_dollar(results.year1_cash_flow)),
        ("Effective Gross Income", fmt_dollar(results.effective_gross_income)),
        ("Operating Expenses", fmt_dollar(results.operating_expenses)),
        ("Loan Amount", fmt_dollar(results.loan_amount)),
        ("Equity Investment", fmt_dollar(results.equity_investment)),
        ("Monthly Payment", fmt_dollar(results.monthly_payment)),
        ("Annual Debt Service", fmt_dollar(results.annual_debt_service)),
        ("Exit Value", fmt_dollar(results.exit_value)),
        ("Net Sale Proceeds", fmt_dollar(results.net_sale_proceeds)),
    ]
