"""IRR, NPV and equity multiple.

Pure functions. No I/O.
"""

import math
from dataclasses import dataclass
from typing import Sequence

from dealpencil.engine.numeric import divide, power

IRR_GUESS = 0.10
IRR_MAX_ITERATIONS = 100
IRR_TOLERANCE = 1e-6
# Newton step is abandoned below this slope
MIN_DERIVATIVE = 1e-12


@dataclass(frozen=True)
class IRRResult:
    rate: float  # percent
    converged: bool
    iterations: int


def npv(cash_flows: Sequence[float], rate: float) -> float:
    """Net present value at a decimal rate (0.10 = 10%); cash_flows[0] is undiscounted."""
    return sum(divide(cf, power(1 + rate, t)) for t, cf in enumerate(cash_flows))


def _npv_derivative(cash_flows: Sequence[float], rate: float) -> float:
    return sum(-t * divide(cf, power(1 + rate, t + 1)) for t, cf in enumerate(cash_flows))


def solve_irr(
    cash_flows: Sequence[float],
    guess: float = IRR_GUESS,
    max_iterations: int = IRR_MAX_ITERATIONS,
    tolerance: float = IRR_TOLERANCE,
) -> IRRResult:
    """Newton-Raphson search for the rate that zeroes NPV.

    Converged means |NPV| fell below tolerance. Otherwise (flat derivative,
    non-finite step, or exhausted iterations) the last rate is returned as a
    best-effort estimate; cash flows with several sign changes may have more
    than one root and the one found depends on the guess.
    """
    rate = guess
    for i in range(max_iterations):
        value = npv(cash_flows, rate)
        if abs(value) < tolerance:
            return IRRResult(rate=rate * 100, converged=True, iterations=i)
        if not math.isfinite(value):
            return IRRResult(rate=rate * 100, converged=False, iterations=i)

        derivative = _npv_derivative(cash_flows, rate)
        if not math.isfinite(derivative) or abs(derivative) < MIN_DERIVATIVE:
            return IRRResult(rate=rate * 100, converged=False, iterations=i)

        rate = rate - value / derivative

    return IRRResult(rate=rate * 100, converged=False, iterations=max_iterations)


def compute_irr(cash_flows: Sequence[float]) -> float:
    """IRR in percent (10.0 = 10%).

    cash_flows[0] should be negative (initial outlay).
    cash_flows[-1] should include sale proceeds.
    """
    return solve_irr(cash_flows).rate


def compute_equity_multiple(cash_flows: Sequence[float]) -> float:
    """Sum of all cash flows over the magnitude of the initial outlay."""
    return divide(sum(cash_flows), abs(cash_flows[0]))
