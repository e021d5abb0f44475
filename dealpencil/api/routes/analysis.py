"""Analysis routes: the primary API entry point."""

import logging

from fastapi import APIRouter, Response

from dealpencil.api.schemas import AnalysisResponse, DealRequest
from dealpencil.config import settings
from dealpencil.engine.assessment import assess_if_finite
from dealpencil.engine.proforma import run_underwriting
from dealpencil.reports.pdf_report import build_report_pdf

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["analysis"])


@router.post("/analyze", response_model=AnalysisResponse)
def analyze(req: DealRequest) -> AnalysisResponse:
    """Deal parameters -> metrics, cash flows, pro forma and assessment."""
    result = run_underwriting(req.to_parameters())
    assessment = assess_if_finite(result)
    if assessment is None:
        logger.info("Deal not assessable: non-finite metrics for %s", req.model_dump())

    return AnalysisResponse.from_results(req, result, assessment)


@router.post(
    "/report",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
def report(req: DealRequest) -> Response:
    """Render the PDF analysis report for a deal."""
    params = req.to_parameters()
    result = run_underwriting(params)
    pdf_bytes = build_report_pdf(params, result, assess_if_finite(result))
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{settings.report_filename}"'},
    )
