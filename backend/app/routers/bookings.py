"""Booking quote routes."""

from __future__ import annotations

from fastapi import APIRouter

from ops_dashboard.domain.pricing import (
    BookingPriceCalculation,
    calculate_booking_price,
    validate_pricing_inputs,
)
from ops_dashboard.errors import ValidationFailed

from ..schemas.bookings import QuoteRequest

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("/quote", response_model=BookingPriceCalculation, summary="Price a booking")
async def quote_booking(payload: QuoteRequest):
    problems = validate_pricing_inputs(payload.numberOfStudents, payload.numberOfCrew, payload.services)
    if problems:
        raise ValidationFailed({"services": "; ".join(problems)})
    return calculate_booking_price(
        payload.destinationPricing,
        payload.numberOfStudents,
        payload.numberOfCrew,
        payload.services,
    )
