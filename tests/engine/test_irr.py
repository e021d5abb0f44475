import math

import pytest

from dealpencil.engine.irr import compute_equity_multiple, compute_irr, npv, solve_irr


def _flows_at(rate, tail):
    """Prepend the outlay that makes NPV(rate) exactly zero."""
    outlay = sum(cf / (1 + rate) ** t for t, cf in enumerate(tail, start=1))
    return [-outlay] + list(tail)


class TestIRR:
    def test_simple_irr(self):
        """Invest $100, get $110 after 1 year = 10% IRR."""
        assert compute_irr([-100, 110]) == pytest.approx(10, abs=1e-6)

    def test_bond_like_flows(self):
        assert compute_irr([-1000, 120, 120, 1120]) == pytest.approx(12, rel=1e-4)

    @pytest.mark.parametrize("rate", [0.035, 0.085, 0.22, 0.4])
    def test_recovers_known_rate(self, rate):
        cfs = _flows_at(rate, [50_000, 60_000, 55_000, 70_000, 1_200_000])
        assert compute_irr(cfs) == pytest.approx(rate * 100, rel=1e-4)

    def test_negative_irr(self):
        assert compute_irr([-100, 50, 40]) < 0

    def test_converged_flag_and_iterations(self):
        result = solve_irr([-100, 120])
        assert result.converged
        assert 0 < result.iterations < 100

    def test_no_root_returns_best_effort(self):
        """All-negative flows have no IRR; the solver returns without raising."""
        result = solve_irr([-100, -10, -10])
        assert not result.converged
        assert isinstance(result.rate, float)

    def test_exhausted_iterations_return_last_rate(self):
        result = solve_irr([-100, 120], max_iterations=1)
        assert not result.converged
        assert result.iterations == 1
        assert result.rate != pytest.approx(20)

    def test_deterministic(self):
        cfs = [-1_312_500, 190_000, 195_000, 200_000, 205_000, 4_300_000]
        assert compute_irr(cfs) == compute_irr(cfs)


class TestNPV:
    def test_zero_rate_is_sum(self):
        assert npv([-100, 60, 60], 0) == pytest.approx(20)

    def test_at_irr_is_zero(self):
        assert npv([-100, 110], 0.10) == pytest.approx(0, abs=1e-9)

    def test_first_flow_undiscounted(self):
        assert npv([-100], 0.5) == -100


class TestEquityMultiple:
    def test_net_sum_over_outlay(self):
        assert compute_equity_multiple([-100, 10, 150]) == pytest.approx(0.6)

    def test_zero_outlay_not_finite(self):
        assert not math.isfinite(compute_equity_multiple([0.0, 10, 10]))
