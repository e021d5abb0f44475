import math
from dataclasses import replace

import pytest

from dealpencil.engine import proforma
from dealpencil.engine.debt import amortization_schedule, monthly_payment, remaining_balance
from dealpencil.engine.irr import npv
from dealpencil.engine.proforma import NPV_DISCOUNT_RATE, loan_state, run_underwriting


class TestLoanState:
    def test_canonical(self, canonical_params):
        loan = loan_state(canonical_params)
        assert loan.loan_amount == 1_312_500
        assert loan.equity_investment == 437_500
        assert loan.monthly_payment == monthly_payment(1_312_500, 6.5, 25)
        assert loan.annual_debt_service == loan.monthly_payment * 12


class TestRunUnderwriting:
    def test_canonical_scenario(self, canonical_params):
        result = run_underwriting(canonical_params)
        assert result.loan_amount == 1_312_500
        assert result.equity_investment == 437_500
        assert round(result.cap_rate, 2) == 17.14
        assert result.operating_expenses == 120_000
        assert result.effective_gross_income == 420_000
        assert result.year1_noi == result.year1_cash_flow == 300_000

    def test_repeat_runs_identical(self, canonical_params, value_add_params):
        assert run_underwriting(canonical_params) == run_underwriting(canonical_params)
        assert run_underwriting(value_add_params) == run_underwriting(value_add_params)

    def test_holding_period_counts_years(self, canonical_params):
        """holding_period is in years: 5 -> five annual flows and five years of growth."""
        result = run_underwriting(canonical_params)
        assert len(result.projected_cash_flows) == 6
        assert len(result.yearly_projections) == 5
        assert result.exit_value == pytest.approx(300_000 * 1.02 ** 5 / 0.06)

    def test_initial_outlay_is_negative_loan_amount(self, canonical_params):
        result = run_underwriting(canonical_params)
        assert result.projected_cash_flows[0] == -1_312_500

    def test_sale_proceeds_added_once_to_final_year(self, canonical_params):
        result = run_underwriting(canonical_params)
        cfs = result.projected_cash_flows
        years = result.yearly_projections
        assert cfs[-1] == years[-1].cash_flow + result.net_sale_proceeds
        for year in years[:-1]:
            assert cfs[year.year] == year.cash_flow

    def test_net_sale_proceeds(self, canonical_params):
        result = run_underwriting(canonical_params)
        balance = remaining_balance(1_312_500, 6.5, 25, 5, 0)
        assert result.remaining_loan_balance == balance
        assert result.selling_costs == pytest.approx(result.exit_value * 0.04)
        assert result.net_sale_proceeds == pytest.approx(
            result.exit_value - balance - result.exit_value * 0.04
        )

    def test_ratios(self, canonical_params):
        result = run_underwriting(canonical_params)
        assert result.dscr == pytest.approx(300_000 / result.annual_debt_service)
        assert result.cash_on_cash == pytest.approx(300_000 / 437_500 * 100)
        assert result.break_even_occupancy == pytest.approx(
            (result.annual_debt_service + 120_000) / 420_000
        )
        assert result.equity_multiple == pytest.approx(
            sum(result.projected_cash_flows) / 1_312_500
        )
        assert result.npv == npv(result.projected_cash_flows, NPV_DISCOUNT_RATE)

    def test_irr_zeroes_npv(self, canonical_params):
        result = run_underwriting(canonical_params)
        assert result.irr_converged
        assert abs(npv(result.projected_cash_flows, result.irr / 100)) < 1e-6
        assert result.irr > 15

    def test_results_finite(self, canonical_params, value_add_params):
        assert run_underwriting(canonical_params).is_finite
        assert run_underwriting(value_add_params).is_finite

    def test_schedule_built_once(self, value_add_params, monkeypatch):
        calls = []

        def counting_schedule(*args, **kwargs):
            calls.append(args)
            return amortization_schedule(*args, **kwargs)

        monkeypatch.setattr(proforma, "amortization_schedule", counting_schedule)
        result = run_underwriting(value_add_params)
        assert len(calls) == 1
        assert result.remaining_loan_balance == remaining_balance(
            value_add_params.loan_amount, 7, 30, 7, 2
        )
        assert result.yearly_projections[-1].loan_balance == result.remaining_loan_balance


class TestValueAdd:
    def test_io_years_pay_interest_only(self, value_add_params):
        result = run_underwriting(value_add_params)
        io_debt = value_add_params.loan_amount * 0.07
        assert result.yearly_projections[0].debt_service == pytest.approx(io_debt)
        assert result.yearly_projections[1].debt_service == pytest.approx(io_debt)
        assert result.yearly_projections[2].debt_service == pytest.approx(result.annual_debt_service)

    def test_io_keeps_loan_balance_flat(self, value_add_params):
        result = run_underwriting(value_add_params)
        balances = [p.loan_balance for p in result.yearly_projections]
        assert balances[0] == balances[1] == value_add_params.loan_amount
        for earlier, later in zip(balances[1:], balances[2:]):
            assert later < earlier

    def test_io_raises_exit_balance(self, value_add_params):
        with_io = run_underwriting(value_add_params)
        without_io = run_underwriting(replace(value_add_params, io_period=0))
        assert with_io.remaining_loan_balance > without_io.remaining_loan_balance

    def test_year_one_drag_and_capex(self, value_add_params):
        year1 = run_underwriting(value_add_params).yearly_projections[0]
        assert year1.rehab_vacancy_loss == pytest.approx(300_000 * 0.25)
        assert year1.capex == 75_000
        assert year1.cash_flow == pytest.approx(
            300_000 * 0.75 - 75_000 - value_add_params.loan_amount * 0.07
        )


class TestDegenerateInputs:
    def test_zero_price_propagates_non_finite(self, canonical_params):
        result = run_underwriting(replace(canonical_params, purchase_price=0))
        assert math.isinf(result.cap_rate)
        assert math.isinf(result.cash_on_cash)
        assert not result.is_finite

    def test_zero_amortization_propagates_non_finite(self, canonical_params):
        result = run_underwriting(replace(canonical_params, amortization=0))
        assert math.isinf(result.monthly_payment)
        assert not result.is_finite

    def test_zero_rate_is_finite(self, canonical_params):
        result = run_underwriting(replace(canonical_params, interest_rate=0))
        assert result.monthly_payment == 1_312_500 / 300
        assert result.is_finite
