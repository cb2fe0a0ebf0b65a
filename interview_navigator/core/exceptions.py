"""
Domain errors for Interview Navigator.

Endpoints translate these into HTTP responses; anything else (including
store failures) propagates unchanged.
"""


class NavigatorError(Exception):
    """Base class for domain errors with a user-facing message."""
    pass


class InterviewerNotFoundError(NavigatorError):
    def __init__(self, interviewer_id: str):
        self.interviewer_id = interviewer_id
        super().__init__(f"Interviewer not found: {interviewer_id}")


class InterviewerAlreadyExistsError(NavigatorError):
    def __init__(self, interviewer_id: str):
        self.interviewer_id = interviewer_id
        super().__init__(f"Interviewer profile already exists: {interviewer_id}")


class InvalidAvailabilityError(NavigatorError):
    """Raised when an availability rule fails write-time validation."""
    pass


class BookingNotFoundError(NavigatorError):
    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__(f"Booking not found: {booking_id}")


class InvalidBookingError(NavigatorError):
    """Raised when a booking request is rejected before pricing."""
    pass


class SlotUnavailableError(NavigatorError):
    """Raised when the requested time is outside the interviewer's availability."""
    pass


class BookingConflictError(NavigatorError):
    """Raised when the requested time overlaps an active booking."""

    def __init__(self, conflicting_ids: list[str]):
        self.conflicting_ids = conflicting_ids
        super().__init__("The interviewer already has a booking at this time")


class BookingStateError(NavigatorError):
    """Raised when a booking status transition is not allowed."""
    pass


class BookingNotReviewableError(NavigatorError):
    """Raised when a review is submitted for a booking that cannot be reviewed."""
    pass


class ReviewAlreadyExistsError(NavigatorError):
    def __init__(self, booking_id: str):
        self.booking_id = booking_id
        super().__init__("A review has already been submitted for this booking")


class ReviewNotFoundError(NavigatorError):
    def __init__(self, review_id: str):
        self.review_id = review_id
        super().__init__(f"Review not found: {review_id}")


class PaymentError(NavigatorError):
    """Raised when the payments backend rejects or fails a request."""
    pass
