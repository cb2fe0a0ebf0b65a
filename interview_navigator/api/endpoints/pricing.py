"""
Pricing API endpoints

Price quotes for a booking, either from an explicit hourly rate or from
an interviewer's stored rate.
"""

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from interview_navigator.api.dependencies import (
    get_booking_service,
    get_pricing_calculator,
)
from interview_navigator.api.errors import to_http_exception
from interview_navigator.core.booking_service import BookingService
from interview_navigator.core.exceptions import NavigatorError
from interview_navigator.core.pricing_calculator import PricingCalculator, format_currency
from interview_navigator.models.pricing import PricingBreakdown

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class QuoteResponse(BaseModel):
    """Price breakdown plus display strings."""
    breakdown: PricingBreakdown
    display_total: str
    display_platform_fee: str


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.get("/quote", response_model=QuoteResponse)
async def get_quote(
    duration_minutes: int = Query(..., ge=0),
    hourly_rate: float | None = Query(default=None, ge=0, allow_inf_nan=False),
    interviewer_id: str | None = None,
    currency: str | None = None,
    calculator: PricingCalculator = Depends(get_pricing_calculator),
    bookings: BookingService = Depends(get_booking_service),
) -> QuoteResponse:
    """
    Quote the price of a booking.

    With `interviewer_id` the interviewer's rate and currency are used and
    the booking duration rules apply; otherwise `hourly_rate` is priced
    as given.
    """
    if interviewer_id:
        try:
            breakdown = await bookings.quote(interviewer_id, duration_minutes)
        except NavigatorError as e:
            raise to_http_exception(e) from e
    elif hourly_rate is not None:
        breakdown = calculator.calculate(
            hourly_rate, duration_minutes, currency.upper() if currency else None
        )
    else:
        raise HTTPException(
            status_code=400,
            detail="Either hourly_rate or interviewer_id is required",
        )

    return QuoteResponse(
        breakdown=breakdown,
        display_total=format_currency(breakdown.total, breakdown.currency),
        display_platform_fee=format_currency(breakdown.platform_fee, breakdown.currency),
    )
