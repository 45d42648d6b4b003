"""PDF document routes."""

from __future__ import annotations

import re
from datetime import datetime

from fastapi import APIRouter, Depends, Request, Response

from ops_dashboard.adapters.pdf_renderer import RenderOptions
from ops_dashboard.documents import (
    BOOKING_COMPANY_NAME,
    DEALERSHIP_COMPANY_NAME,
    LANDSCAPE_MARGIN,
    load_company_info,
    normalize_language,
    render_booking_html,
    render_contract_html,
    render_logs_html,
)
from ops_dashboard.logging_config import get_logger
from ops_dashboard.services.inventory import load_activity_logs

from ..config import get_pdf_renderer, get_supabase
from ..errors import request_language
from ..schemas.documents import ActivityLogPdfRequest, BookingPdfRequest, ContractPdfRequest

logger = get_logger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


def _language(request: Request, requested: str | None) -> str:
    if requested:
        return normalize_language(requested)
    return request_language(request)


def pdf_response(content: bytes, filename: str) -> Response:
    safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", filename)
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{safe_name}"'},
    )


@router.post("/booking-summary", summary="Render a booking summary PDF")
async def booking_summary_pdf(
    payload: BookingPdfRequest,
    request: Request,
    supabase=Depends(get_supabase),
    renderer=Depends(get_pdf_renderer),
):
    language = _language(request, payload.language)
    company = load_company_info(supabase, default_name=BOOKING_COMPANY_NAME)
    html = render_booking_html(payload.booking, language, company, generated_at=datetime.now())
    content = await renderer.render(html)
    logger.info("Booking summary %s rendered (%s)", payload.booking.booking_reference, language)
    return pdf_response(content, f"booking-{payload.booking.booking_reference}.pdf")


@router.post("/car-contract", summary="Render a car purchase contract PDF")
async def car_contract_pdf(
    payload: ContractPdfRequest,
    request: Request,
    supabase=Depends(get_supabase),
    renderer=Depends(get_pdf_renderer),
):
    language = _language(request, payload.language)
    company = load_company_info(supabase, default_name=DEALERSHIP_COMPANY_NAME)
    html = render_contract_html(payload.contract, language, company, generated_at=datetime.now())
    content = await renderer.render(html)
    vehicle = payload.contract.vehicle
    logger.info("Car contract rendered for %s %s (%s)", vehicle.make, vehicle.model, language)
    return pdf_response(content, f"car-contract-{vehicle.plate_number or payload.contract.deal_date}.pdf")


@router.post("/activity-log", summary="Render the activity log as a landscape PDF")
async def activity_log_pdf(
    payload: ActivityLogPdfRequest,
    request: Request,
    supabase=Depends(get_supabase),
    renderer=Depends(get_pdf_renderer),
):
    language = _language(request, payload.language)
    entries = load_activity_logs(
        supabase, start=payload.startDate, end=payload.endDate, log_type=payload.type
    )
    company = load_company_info(supabase, default_name=DEALERSHIP_COMPANY_NAME)
    generated_at = datetime.now()
    html = render_logs_html(entries, language, company, generated_at=generated_at)
    content = await renderer.render(html, RenderOptions(landscape=True, margin=dict(LANDSCAPE_MARGIN)))
    logger.info("Activity log rendered with %d entries (%s)", len(entries), language)
    return pdf_response(content, f"activity-logs-{generated_at.date().isoformat()}.pdf")
