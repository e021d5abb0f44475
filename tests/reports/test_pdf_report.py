import math
from dataclasses import replace

from dealpencil.engine.assessment import assess_if_finite
from dealpencil.engine.proforma import run_underwriting
from dealpencil.reports.formatting import (
    fmt_dollar,
    fmt_multiple,
    fmt_pct,
    key_metric_rows,
    property_detail_rows,
)
from dealpencil.reports.pdf_report import build_report_pdf


class TestFormatting:
    def test_dollar(self):
        assert fmt_dollar(1_750_000) == "$1,750,000"
        assert fmt_dollar(-1_500.4) == "-$1,500"
        assert fmt_dollar(math.inf) == "n/a"

    def test_percent_is_whole_number(self):
        assert fmt_pct(17.142857) == "17.14%"
        assert fmt_pct(math.nan) == "n/a"

    def test_multiple(self):
        assert fmt_multiple(2.456) == "2.46x"

    def test_holding_period_labelled_in_years(self, canonical_params):
        rows = dict(property_detail_rows(canonical_params))
        assert rows["Holding Period"] == "5 years"

    def test_break_even_shown_as_percent(self, canonical_params):
        result = run_underwriting(canonical_params)
        rows = dict(key_metric_rows(result))
        assert rows["Break-even Occupancy"] == fmt_pct(result.break_even_occupancy * 100)
        assert rows["Cap Rate"] == "17.14%"


class TestBuildReportPdf:
    def test_renders_pdf(self, canonical_params):
        result = run_underwriting(canonical_params)
        pdf = build_report_pdf(canonical_params, result, assess_if_finite(result))
        assert isinstance(pdf, bytes)
        assert pdf[:4] == b"%PDF"

    def test_long_hold_renders(self, value_add_params):
        params = replace(value_add_params, holding_period=30)
        result = run_underwriting(params)
        assert build_report_pdf(params, result, assess_if_finite(result))[:4] == b"%PDF"

    def test_unassessable_deal_renders(self, canonical_params):
        params = replace(canonical_params, purchase_price=0)
        result = run_underwriting(params)
        assert build_report_pdf(params, result, None)[:4] == b"%PDF"
