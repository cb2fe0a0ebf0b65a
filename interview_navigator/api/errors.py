"""
Translation of domain errors into HTTP responses.
"""

from fastapi import HTTPException

from interview_navigator.core.exceptions import (
    NavigatorError,
    InterviewerNotFoundError,
    InterviewerAlreadyExistsError,
    InvalidAvailabilityError,
    BookingNotFoundError,
    InvalidBookingError,
    SlotUnavailableError,
    BookingConflictError,
    BookingStateError,
    BookingNotReviewableError,
    ReviewAlreadyExistsError,
    ReviewNotFoundError,
    PaymentError,
)

STATUS_CODES: dict[type[NavigatorError], int] = {
    InterviewerNotFoundError: 404,
    BookingNotFoundError: 404,
    ReviewNotFoundError: 404,
    InterviewerAlreadyExistsError: 409,
    ReviewAlreadyExistsError: 409,
    BookingConflictError: 409,
    BookingStateError: 409,
    InvalidAvailabilityError: 400,
    InvalidBookingError: 400,
    SlotUnavailableError: 400,
    BookingNotReviewableError: 400,
    PaymentError: 502,
}


def to_http_exception(error: NavigatorError) -> HTTPException:
    """HTTPException carrying the error's message; unknown domain errors map to 400."""
    status_code = STATUS_CODES.get(type(error), 400)

    if isinstance(error, BookingConflictError):
        detail = {"message": str(error), "conflicting_booking_ids": error.conflicting_ids}
        return HTTPException(status_code=status_code, detail=detail)

    return HTTPException(status_code=status_code, detail=str(error))
