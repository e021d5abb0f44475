"""Generate the one-deal PDF analysis report using fpdf2.

Fixed sections: header, property details, key performance metrics,
pro forma, deal analysis, footer.
"""

import logging

from fpdf import FPDF

from dealpencil.config import settings
from dealpencil.models.deal import DealParameters
from dealpencil.models.results import CalculationResults, DealAssessment
from dealpencil.reports.formatting import (
    fmt_dollar,
    key_metric_rows,
    property_detail_rows,
)

logger = logging.getLogger(__name__)

# Colors
BLUE = (52, 144, 220)
WHITE = (255, 255, 255)
LIGHT_GRAY = (242, 242, 242)
GRAY = (128, 128, 128)
BLACK = (0, 0, 0)

UNABLE_TO_ASSESS = (
    "Unable to assess: one or more metrics could not be computed from the inputs provided."
)


class DealReportPDF(FPDF):
    """Letter-style report with the contact footer on every page."""

    def footer(self):
        self.set_y(-20)
        self.set_font("Helvetica", "", 8)
        self.set_text_color(*GRAY)
        self.cell(0, 5, settings.report_contact, align="C", new_x="LMARGIN", new_y="NEXT")
        self.cell(0, 5, f"Page {self.page_no()}", align="C")
        self.set_text_color(*BLACK)


def _section(pdf, title):
    """Blue band with white heading text."""
    pdf.ln(4)
    pdf.set_fill_color(*BLUE)
    pdf.set_text_color(*WHITE)
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(0, 8, f" {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
    pdf.set_text_color(*BLACK)
    pdf.ln(2)


def _kv_table(pdf, items, col1_w=60, col2_w=50):
    pdf.set_font("Helvetica", "", 10)
    for i, (key, val) in enumerate(items):
        pdf.set_fill_color(*(LIGHT_GRAY if i % 2 == 0 else WHITE))
        pdf.cell(col1_w, 7, key, fill=True)
        pdf.cell(col2_w, 7, val, fill=True, new_x="LMARGIN", new_y="NEXT")


def _data_table(pdf, headers, rows):
    avail = pdf.w - pdf.l_margin - pdf.r_margin
    width = avail / len(headers)

    pdf.set_font("Helvetica", "B", 9)
    pdf.set_fill_color(*BLUE)
    pdf.set_text_color(*WHITE)
    for h in headers:
        pdf.cell(width, 7, h, fill=True, align="C")
    pdf.ln()

    pdf.set_font("Helvetica", "", 9)
    pdf.set_text_color(*BLACK)
    for ri, row in enumerate(rows):
        pdf.set_fill_color(*(LIGHT_GRAY if ri % 2 == 0 else WHITE))
        for ci, val in enumerate(row):
            pdf.cell(width, 6, val, fill=True, align="L" if ci == 0 else "R")
        pdf.ln()


def _bullets(pdf, heading, items):
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(0, 7, heading, new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    for item in items:
        pdf.multi_cell(0, 5, f"  - {item}", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(2)


def build_report_pdf(
    params: DealParameters,
    results: CalculationResults,
    assessment: DealAssessment | None,
) -> bytes:
    """Render the report and return the PDF document as bytes.

    Pass assessment=None when results are not finite; the analysis section
    then states that the deal could not be assessed.
    """
    pdf = DealReportPDF()
    pdf.set_auto_page_break(auto=True, margin=25)
    pdf.set_margins(15, 15, 15)
    pdf.add_page()

    # Header
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, settings.report_title, align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 14)
    pdf.cell(0, 8, settings.report_tagline, align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 6, settings.report_generated_by, align="C", new_x="LMARGIN", new_y="NEXT")
    pdf.set_draw_color(*BLUE)
    pdf.line(pdf.l_margin, pdf.get_y() + 2, pdf.w - pdf.r_margin, pdf.get_y() + 2)
    pdf.ln(4)

    _section(pdf, "Property Details")
    _kv_table(pdf, property_detail_rows(params))

    _section(pdf, "Key Performance Metrics")
    _kv_table(pdf, key_metric_rows(results))

    _section(pdf, "Pro Forma")
    _data_table(
        pdf,
        ["Year", "NOI", "CapEx", "Debt Service", "Cash Flow", "Loan Balance"],
        [
            [
                str(p.year),
                fmt_dollar(p.noi - p.rehab_vacancy_loss),
                fmt_dollar(p.capex),
                fmt_dollar(p.debt_service),
                fmt_dollar(p.cash_flow),
                fmt_dollar(p.loan_balance),
            ]
            for p in results.yearly_projections
        ],
    )

    _section(pdf, "Deal Analysis")
    pdf.set_font("Helvetica", "B", 11)
    pdf.cell(0, 7, "Overall Assessment:", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    if assessment is None:
        pdf.multi_cell(0, 5, UNABLE_TO_ASSESS, new_x="LMARGIN", new_y="NEXT")
    else:
        pdf.multi_cell(0, 5, assessment.message, new_x="LMARGIN", new_y="NEXT")
        pdf.ln(3)
        _bullets(pdf, "Key Strengths:", assessment.strengths)
        _bullets(pdf, "Areas of Concern:", assessment.weaknesses)
        _bullets(pdf, "Recommendations:", assessment.recommendations)

    logger.debug("Rendered report: %d page(s)", pdf.page_no())
    return bytes(pdf.output())
