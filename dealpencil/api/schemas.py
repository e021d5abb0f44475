"""Pydantic schemas for API request/response models."""

import math

from pydantic import BaseModel, Field, model_validator

from dealpencil.models.deal import DealParameters
from dealpencil.models.results import CalculationResults, DealAssessment, YearlyProjection

# Longest holding period or amortization term accepted, in years.
MAX_TERM_YEARS = 100

# Fields a form submission may not leave blank; the rest fall back to defaults.
REQUIRED_FIELDS = (
    "purchase_price",
    "annual_noi",
    "noi_growth_rate",
    "holding_period",
    "exit_cap_rate",
    "ltv",
    "interest_rate",
    "amortization",
    "operating_expense_ratio",
)


# ---- Request schemas ----

class DealRequest(BaseModel):
    """Deal inputs with the ranges the engine assumes.

    Percentages are whole numbers; holding_period and io_period are years.
    """
    purchase_price: float = Field(1_750_000, gt=0)
    annual_noi: float = Field(300_000, gt=0)
    noi_growth_rate: float = Field(2, description="%/yr, may be negative")
    holding_period: int = Field(5, gt=0, le=MAX_TERM_YEARS, description="Years")
    exit_cap_rate: float = Field(6, gt=0)
    ltv: float = Field(75, ge=0, le=100)
    interest_rate: float = Field(6.5, ge=0)
    amortization: float = Field(25, ge=0, le=MAX_TERM_YEARS, description="Years")
    operating_expense_ratio: float = Field(40, ge=0, le=100)
    io_period: float = Field(0, ge=0, description="Years, cannot exceed holding_period")
    capex_year1: float = Field(0, ge=0)
    capex_year2: float = Field(0, ge=0)
    rehab_period: float = Field(0, ge=0, description="Months")
    rehab_vacancy: float = Field(0, ge=0, le=100)
    selling_costs: float = Field(4, ge=0, le=100)

    @model_validator(mode="after")
    def _io_within_hold(self) -> "DealRequest":
        if self.io_period > self.holding_period:
            raise ValueError("io_period cannot exceed holding_period")
        return self

    def to_parameters(self) -> DealParameters:
        return DealParameters(**self.model_dump())


# ---- Response schemas ----

def finite_or_none(value: float) -> float | None:
    """JSON has no NaN / Infinity; degenerate metrics are sent as null."""
    return value if math.isfinite(value) else None


class YearlyProjectionResponse(BaseModel):
    year: int
    noi: float | None
    rehab_vacancy_loss: float | None
    capex: float | None
    debt_service: float | None
    cash_flow: float | None
    loan_balance: float | None

    @classmethod
    def from_projection(cls, p: YearlyProjection) -> "YearlyProjectionResponse":
        return cls(
            year=p.year,
            noi=finite_or_none(p.noi),
            rehab_vacancy_loss=finite_or_none(p.rehab_vacancy_loss),
            capex=finite_or_none(p.capex),
            debt_service=finite_or_none(p.debt_service),
            cash_flow=finite_or_none(p.cash_flow),
            loan_balance=finite_or_none(p.loan_balance),
        )


class MetricsResponse(BaseModel):
    loan_amount: float | None
    equity_investment: float | None
    monthly_payment: float | None
    annual_debt_service: float | None
    year1_noi: float | None
    year1_cash_flow: float | None
    effective_gross_income: float | None
    operating_expenses: float | None
    exit_value: float | None
    remaining_loan_balance: float | None
    selling_costs: float | None
    net_sale_proceeds: float | None
    irr: float | None
    irr_converged: bool
    npv: float | None
    cash_on_cash: float | None
    dscr: float | None
    equity_multiple: float | None
    break_even_occupancy: float | None
    cap_rate: float | None

    @classmethod
    def from_results(cls, r: CalculationResults) -> "MetricsResponse":
        numeric = {
            name: finite_or_none(getattr(r, name))
            for name in cls.model_fields
            if name != "irr_converged"
        }
        return cls(irr_converged=r.irr_converged, **numeric)


class AssessmentResponse(BaseModel):
    status: str
    message: str
    strengths: list[str]
    weaknesses: list[str]
    recommendations: list[str]

    @classmethod
    def from_assessment(cls, a: DealAssessment) -> "AssessmentResponse":
        return cls(
            status=a.status.value,
            message=a.message,
            strengths=list(a.strengths),
            weaknesses=list(a.weaknesses),
            recommendations=list(a.recommendations),
        )


class AnalysisResponse(BaseModel):
    inputs: DealRequest
    metrics: MetricsResponse
    projected_cash_flows: list[float | None]
    yearly_projections: list[YearlyProjectionResponse]
    assessable: bool
    assessment: AssessmentResponse | None = None

    @classmethod
    def from_results(
        cls,
        req: DealRequest,
        result: CalculationResults,
        assessment: DealAssessment | None,
    ) -> "AnalysisResponse":
        return cls(
            inputs=req,
            metrics=MetricsResponse.from_results(result),
            projected_cash_flows=[finite_or_none(cf) for cf in result.projected_cash_flows],
            yearly_projections=[
                YearlyProjectionResponse.from_projection(p) for p in result.yearly_projections
            ],
            assessable=assessment is not None,
            assessment=AssessmentResponse.from_assessment(assessment) if assessment else None,
        )
