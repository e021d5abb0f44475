"""Command-line deal underwriting: prints a terminal report, optionally writes the PDF.

Usage:
    python -m dealpencil.cli
    python -m dealpencil.cli --price 2400000 --noi 180000 --hold 7 --ltv 65 --io-period 2
    python -m dealpencil.cli --pdf deal-analysis.pdf
    python -m dealpencil.cli --json
"""

import argparse
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from dealpencil.api.schemas import AnalysisResponse, DealRequest
from dealpencil.engine.assessment import assess_if_finite
from dealpencil.engine.proforma import run_underwriting
from dealpencil.logging_config import configure_logging
from dealpencil.reports.formatting import (
    fmt_dollar,
    key_metric_rows,
    operating_rows,
    property_detail_rows,
)
from dealpencil.reports.pdf_report import UNABLE_TO_ASSESS, build_report_pdf

logger = logging.getLogger(__name__)

# flag -> DealRequest field
FLAGS = {
    "--price": ("purchase_price", float, "Purchase price ($)"),
    "--noi": ("annual_noi", float, "Year 1 net operating income ($)"),
    "--growth": ("noi_growth_rate", float, "NOI growth (%/year)"),
    "--hold": ("holding_period", int, "Holding period (years)"),
    "--exit-cap": ("exit_cap_rate", float, "Exit cap rate (%)"),
    "--ltv": ("ltv", float, "Loan-to-value (%)"),
    "--rate": ("interest_rate", float, "Interest rate (%)"),
    "--amortization": ("amortization", float, "Amortization (years)"),
    "--opex": ("operating_expense_ratio", float, "Operating expense ratio (%)"),
    "--io-period": ("io_period", float, "Interest-only period (years)"),
    "--capex1": ("capex_year1", float, "CapEx in year 1 ($)"),
    "--capex2": ("capex_year2", float, "CapEx in year 2 ($)"),
    "--rehab-months": ("rehab_period", float, "Rehab period (months)"),
    "--rehab-vacancy": ("rehab_vacancy", float, "Vacancy during rehab (%)"),
    "--selling-costs": ("selling_costs", float, "Selling costs (% of exit value)"),
}


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _rows(rows) -> None:
    for label, value in rows:
        print(f"  {label + ':':<26}{value}")


def print_report(params, result, assessment) -> None:
    _header("Property Details")
    _rows(property_detail_rows(params))

    _header("Key Performance Metrics")
    _rows(key_metric_rows(result))
    if not result.irr_converged:
        print("  (IRR did not converge; value is a best-effort estimate)")

    _header("Operations & Financing")
    _rows(operating_rows(result))

    _header("Pro Forma")
    print(f"  {'Year':>4}  {'Cash Flow':>14}  {'Debt Service':>14}  {'Loan Balance':>14}")
    for p in result.yearly_projections:
        print(
            f"  {p.year:>4}  {fmt_dollar(p.cash_flow):>14}  "
            f"{fmt_dollar(p.debt_service):>14}  {fmt_dollar(p.loan_balance):>14}"
        )

    _header("Deal Analysis")
    if assessment is None:
        print(f"  {UNABLE_TO_ASSESS}")
        return
    print(f"  Status: {assessment.status.value.upper()}")
    print(f"  {assessment.message}")
    for heading, items in (
        ("Key Strengths", assessment.strengths),
        ("Areas of Concern", assessment.weaknesses),
        ("Recommendations", assessment.recommendations),
    ):
        print(f"\n  {heading}:")
        for item in items:
            print(f"    - {item}")
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Does my deal pencil? CRE underwriting calculator")
    for flag, (field, kind, help_text) in FLAGS.items():
        default = DealRequest.model_fields[field].default
        parser.add_argument(flag, dest=field, type=kind, default=default,
                            help=f"{help_text} (default: {default})")
    parser.add_argument("--pdf", type=Path, help="Write the PDF report to this path")
    parser.add_argument("--json", action="store_true", help="Print the analysis as JSON")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        req = DealRequest(**{field: getattr(args, field) for field, _, _ in FLAGS.values()})
    except ValidationError as e:
        parser.error(str(e))

    params = req.to_parameters()
    result = run_underwriting(params)
    assessment = assess_if_finite(result)

    if args.json:
        response = AnalysisResponse.from_results(req, result, assessment)
        print(json.dumps(response.model_dump(mode="json"), indent=2))
    else:
        print_report(params, result, assessment)

    if args.pdf:
        args.pdf.write_bytes(build_report_pdf(params, result, assessment))
        logger.info("Wrote report to %s", args.pdf)


if __name__ == "__main__":
    main()
