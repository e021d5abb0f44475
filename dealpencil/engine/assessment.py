"""Qualitative deal assessment from computed metrics.

Thresholds are ordered rule tables evaluated top-to-bottom; the first
matching rule wins. NaN metrics fail every comparison and fall through to the
last rule of each table.

Pure functions. No I/O.
"""

from typing import Callable

from dealpencil.models.results import CalculationResults, DealAssessment, DealStatus

STRENGTH = "strength"
WEAKNESS = "weakness"

# (dscr, irr %, cash-on-cash %) -> status
STATUS_RULES: tuple[tuple[Callable[[float, float, float], bool], DealStatus], ...] = (
    (lambda dscr, irr, coc: dscr >= 1.25 and irr >= 15 and coc >= 8, DealStatus.GOOD),
    (lambda dscr, irr, coc: dscr >= 1.10 and irr >= 10 and coc >= 6, DealStatus.MODERATE),
    (lambda dscr, irr, coc: True, DealStatus.POOR),
)

STATUS_MESSAGES = {
    DealStatus.GOOD: "This deal shows strong potential with good cash flow coverage and returns.",
    DealStatus.MODERATE: "This deal shows moderate potential but careful consideration is needed.",
    DealStatus.POOR: "This deal shows concerning metrics and requires significant review.",
}

# metric attribute -> ordered (predicate, kind, text)
METRIC_RULES: tuple[tuple[str, tuple[tuple[Callable[[float], bool], str, str], ...]], ...] = (
    ("irr", (
        (lambda v: v > 15, STRENGTH, "Strong IRR indicating excellent potential returns"),
        (lambda v: v > 10, STRENGTH, "Acceptable IRR within market expectations"),
        (lambda v: True, WEAKNESS, "Below-market IRR suggests potential return challenges"),
    )),
    ("dscr", (
        (lambda v: v > 1.25, STRENGTH, "Strong debt service coverage provides safety margin"),
        (lambda v: v > 1.10, WEAKNESS, "Tight debt service coverage - monitor cash flows carefully"),
        (lambda v: True, WEAKNESS, "Concerning debt service coverage - high default risk"),
    )),
    ("cash_on_cash", (
        (lambda v: v > 8, STRENGTH, "Excellent cash-on-cash return"),
        (lambda v: v > 6, STRENGTH, "Decent cash flow generation potential"),
        (lambda v: True, WEAKNESS, "Limited cash flow potential"),
    )),
    ("break_even_occupancy", (
        (lambda v: v < 0.75, STRENGTH, "Low break-even occupancy provides good downside protection"),
        (lambda v: v < 0.85, WEAKNESS, "Moderate break-even occupancy - limited vacancy buffer"),
        (lambda v: True, WEAKNESS, "High break-even occupancy increases risk profile"),
    )),
)

RECOMMENDATIONS = {
    DealStatus.GOOD: (
        "Strong acquisition target with multiple positive indicators",
        "Consider locking in long-term fixed-rate debt",
        "Implement value-add strategies to further enhance returns",
    ),
    DealStatus.MODERATE: (
        "Deal shows promise but requires risk mitigation",
        "Negotiate purchase price to improve returns",
        "Explore ways to enhance NOI through operational improvements",
    ),
    DealStatus.POOR: (
        "Consider passing on this opportunity",
        "If pursuing, substantial price reduction needed",
        "Major operational improvements required to make numbers work",
    ),
}


def deal_status(dscr: float, irr: float, cash_on_cash: float) -> DealStatus:
    """Overall status; total over all inputs including NaN."""
    for predicate, status in STATUS_RULES:
        if predicate(dscr, irr, cash_on_cash):
            return status
    return DealStatus.POOR


def _observe(value: float, rules) -> tuple[str, str]:
    for predicate, kind, text in rules:
        if predicate(value):
            return kind, text
    _, kind, text = rules[-1]
    return kind, text


def assess_deal(results: CalculationResults) -> DealAssessment:
    """Status, message, strengths, weaknesses and recommendations for a deal."""
    status = deal_status(results.dscr, results.irr, results.cash_on_cash)

    strengths: list[str] = []
    weaknesses: list[str] = []
    for metric, rules in METRIC_RULES:
        kind, text = _observe(getattr(results, metric), rules)
        (strengths if kind == STRENGTH else weaknesses).append(text)

    return DealAssessment(
        status=status,
        message=STATUS_MESSAGES[status],
        strengths=tuple(strengths),
        weaknesses=tuple(weaknesses),
        recommendations=RECOMMENDATIONS[status],
    )


def assess_if_finite(results: CalculationResults) -> DealAssessment | None:
    """assess_deal(), or None when a headline metric is NaN / infinite."""
    if not results.is_finite:
        return None
    return assess_deal(results)
