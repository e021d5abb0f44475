"""Plotly Dash application: deal input form, metric cards and assessment."""

import sys
from pathlib import Path

# Ensure project root is on sys.path so `dealpencil.*` imports work
# even when Dash's reloader spawns a child process.
_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import logging

import plotly.graph_objects as go
from dash import Dash, Input, Output, State, callback, dcc, html, no_update
from pydantic import ValidationError

from dealpencil.api.schemas import REQUIRED_FIELDS, DealRequest
from dealpencil.config import settings
from dealpencil.engine.assessment import assess_if_finite
from dealpencil.engine.proforma import run_underwriting
from dealpencil.logging_config import configure_logging
from dealpencil.models.results import DealStatus
from dealpencil.reports.formatting import key_metric_rows, operating_rows
from dealpencil.reports.pdf_report import UNABLE_TO_ASSESS, build_report_pdf

logger = logging.getLogger(__name__)

# field -> label, step
FIELDS = {
    "purchase_price": ("Purchase Price ($)", 1000),
    "annual_noi": ("Annual NOI ($)", 1000),
    "noi_growth_rate": ("NOI Growth (%/year)", 0.1),
    "holding_period": ("Holding Period (years)", 1),
    "exit_cap_rate": ("Exit Cap Rate (%)", 0.1),
    "ltv": ("LTV (%)", 1),
    "interest_rate": ("Interest Rate (%)", 0.01),
    "amortization": ("Amortization (years)", 1),
    "operating_expense_ratio": ("Operating Expense Ratio (%)", 1),
    "io_period": ("Interest Only Period (years)", 1),
    "capex_year1": ("CapEx Year 1 ($)", 1000),
    "capex_year2": ("CapEx Year 2 ($)", 1000),
    "rehab_period": ("Rehab Period (months)", 1),
    "rehab_vacancy": ("Rehab Vacancy (%)", 1),
    "selling_costs": ("Selling Costs (%)", 0.1),
}

STATUS_COLORS = {
    DealStatus.GOOD: "#2ecc71",
    DealStatus.MODERATE: "#f39c12",
    DealStatus.POOR: "#e94560",
}

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#1a1a2e",
    "color": "white",
    "border": "none",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _field(name):
    label, step = FIELDS[name]
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        dcc.Input(
            id=f"in-{name}",
            type="number",
            value=DealRequest.model_fields[name].default,
            step=step,
            style=FIELD_STYLE,
        ),
    ], style={"flex": "1", "minWidth": "180px"})


def _layout():
    names = list(FIELDS)
    rows = [names[i:i + 4] for i in range(0, len(names), 4)]
    return html.Div([
        html.H1("Does my deal pencil?"),
        html.P("A quick \"back of the napkin\" commercial real estate deal analyzer."),
        html.H2("Investment Parameters"),
        *[
            html.Div([_field(n) for n in row],
                     style={"display": "flex", "gap": "1rem", "marginBottom": "0.75rem"})
            for row in rows
        ],
        html.Div([
            html.Button("Analyze Deal", id="analyze-btn", n_clicks=0, style=BTN_STYLE),
            html.Button("Download PDF Report", id="download-btn", n_clicks=0, style=BTN_STYLE),
        ], style={"display": "flex", "gap": "1rem"}),
        dcc.Download(id="download-pdf"),
        html.Div(id="results-container", style={"marginTop": "2rem"}),
    ], style={"maxWidth": "1200px", "margin": "0 auto", "padding": "0 1rem"})


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def _metric_card(label, value):
    return html.Div([
        html.Div(value, style={"fontSize": "1.5rem", "fontWeight": "bold"}),
        html.Div(label, style={"fontSize": "0.85rem", "color": "#666"}),
    ], style={
        "backgroundColor": "white",
        "border": "1px solid #ddd",
        "borderRadius": "8px",
        "padding": "1rem 1.5rem",
        "minWidth": "150px",
        "textAlign": "center",
    })


def _assessment_panel(assessment):
    if assessment is None:
        return html.Div(html.P(UNABLE_TO_ASSESS), style={"padding": "1rem", "border": "1px solid #ddd"})

    color = STATUS_COLORS[assessment.status]

    def _list(title, items):
        return html.Div([html.H4(title), html.Ul([html.Li(i) for i in items])],
                        style={"flex": "1"})

    return html.Div([
        html.H3(f"Deal Status: {assessment.status.value.title()}", style={"color": color}),
        html.P(assessment.message),
        html.Div([
            _list("Key Strengths", assessment.strengths),
            _list("Areas of Concern", assessment.weaknesses),
            _list("Recommendations", assessment.recommendations),
        ], style={"display": "flex", "gap": "1rem"}),
    ], style={"border": f"1px solid {color}", "borderRadius": "8px", "padding": "1rem"})


def build_results(result, assessment):
    years = [p.year for p in result.yearly_projections]

    cf_fig = go.Figure()
    cf_fig.add_trace(go.Bar(
        x=years,
        y=[p.cash_flow for p in result.yearly_projections],
        name="Cash Flow",
        marker_color="#1a1a2e",
    ))
    cf_fig.add_trace(go.Bar(
        x=years,
        y=[p.debt_service for p in result.yearly_projections],
        name="Debt Service",
        marker_color="#e94560",
    ))
    cf_fig.update_layout(title="Annual Cash Flow", barmode="group", xaxis_title="Year", yaxis_title="$")

    return html.Div([
        html.Div([_metric_card(label, value) for label, value in key_metric_rows(result)],
                 style={"display": "flex", "gap": "1rem", "marginBottom": "1rem", "flexWrap": "wrap"}),
        html.Div([_metric_card(label, value) for label, value in operating_rows(result)],
                 style={"display": "flex", "gap": "1rem", "marginBottom": "2rem", "flexWrap": "wrap"}),
        _assessment_panel(assessment),
        dcc.Graph(figure=cf_fig),
    ])


def _error_label(loc) -> str:
    if not loc:
        return "Input"
    name = str(loc[0])
    return FIELDS[name][0] if name in FIELDS else name


def validation_messages(error: ValidationError) -> list[tuple[str, str]]:
    return [(_error_label(e["loc"]), e["msg"]) for e in error.errors()]


def build_errors(messages):
    return html.Div([
        html.H4("Please correct the following:"),
        html.Ul([html.Li(f"{label}: {msg}") for label, msg in messages]),
    ], style={"color": "#e94560"})


def parse_inputs(values):
    """Form values in FIELDS order -> (DealRequest, []) or (None, [(label, message), ...]).

    Blank required fields are errors; blank optional fields take their defaults.
    """
    submitted = dict(zip(FIELDS, values))
    missing = [
        (FIELDS[name][0], "Required") for name in REQUIRED_FIELDS if submitted.get(name) is None
    ]
    if missing:
        return None, missing
    try:
        return DealRequest(**{name: v for name, v in submitted.items() if v is not None}), []
    except ValidationError as e:
        return None, validation_messages(e)


def analyze_inputs(values):
    req, errors = parse_inputs(values)
    if req is None:
        return build_errors(errors)

    result = run_underwriting(req.to_parameters())
    assessment = assess_if_finite(result)
    if assessment is None:
        logger.info("Deal not assessable: non-finite metrics for %s", req.model_dump())
    return build_results(result, assessment)


def report_download(values):
    req, _ = parse_inputs(values)
    if req is None:
        return no_update

    params = req.to_parameters()
    result = run_underwriting(params)
    pdf = build_report_pdf(params, result, assess_if_finite(result))
    return dcc.send_bytes(pdf, settings.report_filename)


@callback(
    Output("results-container", "children"),
    Input("analyze-btn", "n_clicks"),
    [State(f"in-{name}", "value") for name in FIELDS],
    prevent_initial_call=True,
)
def run_analysis(n_clicks, *values):
    return analyze_inputs(values)


@callback(
    Output("download-pdf", "data"),
    Input("download-btn", "n_clicks"),
    [State(f"in-{name}", "value") for name in FIELDS],
    prevent_initial_call=True,
)
def download_report(n_clicks, *values):
    return report_download(values)


app = Dash(__name__, suppress_callback_exceptions=True, title="Deal Pencil")
app.layout = _layout()


if __name__ == "__main__":
    configure_logging()
    app.run(debug=settings.debug, port=settings.dashboard_port)
