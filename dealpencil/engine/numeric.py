"""Float helpers with IEEE semantics.

Python raises on float division by zero and on power overflow; the engine
instead lets degenerate inputs surface as NaN / inf in its outputs.
"""

import math


def divide(numerator: float, denominator: float) -> float:
    """numerator / denominator, returning +-inf or NaN instead of raising."""
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def power(base: float, exponent: float) -> float:
    """base ** exponent, returning inf on overflow."""
    try:
        return base ** exponent
    except OverflowError:
        return math.inf
    except ZeroDivisionError:
        # 0.0 ** negative exponent
        return math.inf


def is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)
