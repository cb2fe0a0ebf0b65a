"""
Booking API endpoints

Handles the booking lifecycle:
- Creating bookings against an interviewer's slots
- Listing and reading bookings
- Status transitions (confirm, complete, cancel, no-show, reschedule)
- Payment intents and refunds
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from interview_navigator.api.dependencies import (
    get_booking_service,
    get_payment_client,
)
from interview_navigator.api.errors import to_http_exception
from interview_navigator.core.booking_service import BookingService
from interview_navigator.core.exceptions import BookingStateError, NavigatorError
from interview_navigator.core.payment_client import PaymentClient
from interview_navigator.models.booking import (
    HHMM_PATTERN,
    Booking,
    BookingRequest,
    BookingStatus,
    CancelledBy,
)
from interview_navigator.models.pricing import PaymentIntent

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class CancelRequest(BaseModel):
    """Request model for cancelling a booking."""
    cancelled_by: CancelledBy
    reason: str | None = Field(default=None, max_length=500)


class RescheduleRequest(BaseModel):
    """Request model for moving a booking to a new slot."""
    scheduled_date: date
    scheduled_time: str = Field(..., pattern=HHMM_PATTERN)


class RefundRequest(BaseModel):
    """Partial refund amount in major units; omit for a full refund."""
    amount: float | None = Field(default=None, gt=0, allow_inf_nan=False)
    reason: str | None = None


class RefundResponse(BaseModel):
    booking_id: str
    refund_id: str


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("", response_model=Booking, status_code=201)
async def create_booking(
    request: BookingRequest,
    bookings: BookingService = Depends(get_booking_service),
) -> Booking:
    """
    Book an interviewer.

    The booking is created as pending with the price breakdown copied on.
    """
    try:
        return await bookings.create_booking(request)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.get("", response_model=list[Booking])
async def list_bookings(
    user_id: str,
    status: list[BookingStatus] | None = Query(default=None),
    bookings: BookingService = Depends(get_booking_service),
) -> list[Booking]:
    """Bookings where the user is either the candidate or the interviewer."""
    return await bookings.list_bookings(user_id, status)


@router.get("/{booking_id}", response_model=Booking)
async def get_booking(
    booking_id: str,
    bookings: BookingService = Depends(get_booking_service),
) -> Booking:
    try:
        return await bookings.get_booking(booking_id)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.post("/{booking_id}/confirm", response_model=Booking)
async def confirm_booking(
    booking_id: str,
    bookings: BookingService = Depends(get_booking_service),
) -> Booking:
    try:
        return await bookings.confirm(booking_id)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.post("/{booking_id}/complete", response_model=Booking)
async def complete_booking(
    booking_id: str,
    bookings: BookingService = Depends(get_booking_service),
) -> Booking:
    """Mark the interview as held; the candidate can then review it."""
    try:
        return await bookings.complete(booking_id)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.post("/{booking_id}/no-show", response_model=Booking)
async def mark_no_show(
    booking_id: str,
    bookings: BookingService = Depends(get_booking_service),
) -> Booking:
    try:
        return await bookings.mark_no_show(booking_id)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.post("/{booking_id}/cancel", response_model=Booking)
async def cancel_booking(
    booking_id: str,
    request: CancelRequest,
    bookings: BookingService = Depends(get_booking_service),
) -> Booking:
    try:
        return await bookings.cancel(booking_id, request.cancelled_by, request.reason)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.post("/{booking_id}/reschedule", response_model=Booking)
async def reschedule_booking(
    booking_id: str,
    request: RescheduleRequest,
    bookings: BookingService = Depends(get_booking_service),
) -> Booking:
    """Move the booking to another offered slot; it returns to pending."""
    try:
        return await bookings.reschedule(
            booking_id, request.scheduled_date, request.scheduled_time
        )
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.post("/{booking_id}/payment-intent", response_model=PaymentIntent)
async def create_payment_intent(
    booking_id: str,
    bookings: BookingService = Depends(get_booking_service),
    payments: PaymentClient = Depends(get_payment_client),
) -> PaymentIntent:
    """
    Create a payment intent for the booking total.

    Only pending or confirmed bookings can be paid for.
    """
    try:
        booking = await bookings.get_booking(booking_id)
        if booking.status not in BookingService.ACTIVE_STATUSES:
            raise BookingStateError(
                f"Cannot pay for a booking that is {booking.status.value}"
            )

        intent = await payments.create_payment_intent(
            booking.id,
            booking.pricing(),
            metadata={
                "candidateId": booking.candidate_id,
                "interviewerId": booking.interviewer_id,
            },
        )
        await bookings.attach_payment_intent(booking.id, intent.id)
        return intent
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.post("/{booking_id}/refund", response_model=RefundResponse)
async def refund_booking(
    booking_id: str,
    request: RefundRequest,
    bookings: BookingService = Depends(get_booking_service),
    payments: PaymentClient = Depends(get_payment_client),
) -> RefundResponse:
    """Refund a paid booking, fully or partially."""
    try:
        booking = await bookings.get_booking(booking_id)
        if not booking.payment_intent_id:
            raise BookingStateError("Booking has no payment to refund")

        refund_id = await payments.process_refund(booking.id, request.amount, request.reason)
        return RefundResponse(booking_id=booking.id, refund_id=refund_id)
    except NavigatorError as e:
        raise to_http_exception(e) from e
