"""
Booking models for Interview Navigator
"""

from datetime import date, datetime, time
from enum import Enum

from pydantic import BaseModel, Field

from interview_navigator.models.pricing import PricingBreakdown

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class BookingStatus(str, Enum):
    """Booking lifecycle states."""

    PENDING = "pending"  # Awaiting interviewer confirmation
    CONFIRMED = "confirmed"  # Interviewer accepted
    COMPLETED = "completed"  # Interview took place; reviewable
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"


class CancelledBy(str, Enum):
    CANDIDATE = "candidate"
    INTERVIEWER = "interviewer"
    SYSTEM = "system"


class BookingRequest(BaseModel):
    """Candidate's request to book an interviewer."""

    candidate_id: str = Field(..., min_length=1)
    candidate_name: str = Field(..., min_length=1)
    candidate_email: str = Field(..., min_length=3)
    interviewer_id: str = Field(..., min_length=1)

    scheduled_date: date
    scheduled_time: str = Field(..., pattern=HHMM_PATTERN)
    duration_minutes: int = Field(default=45, gt=0)
    timezone: str = "UTC"

    role: str | None = None
    skills: list[str] = Field(default_factory=list)


class Booking(BaseModel):
    """A stored booking, with the pricing copied on at creation time."""

    id: str
    candidate_id: str
    candidate_name: str
    candidate_email: str
    interviewer_id: str
    interviewer_name: str

    scheduled_date: date
    scheduled_time: str = Field(..., pattern=HHMM_PATTERN)
    duration_minutes: int
    timezone: str = "UTC"

    role: str | None = None
    skills: list[str] = Field(default_factory=list)

    status: BookingStatus = BookingStatus.PENDING

    # Pricing snapshot
    subtotal: float
    platform_fee: float
    total: float
    interviewer_earnings: float
    currency: str

    cancelled_by: CancelledBy | None = None
    cancellation_reason: str | None = None
    payment_intent_id: str | None = None

    created_at: datetime
    updated_at: datetime

    @property
    def starts_at(self) -> datetime:
        return start_datetime(self.scheduled_date, self.scheduled_time)

    def pricing(self) -> PricingBreakdown:
        """The pricing snapshot as a breakdown (exact decimals)."""
        return PricingBreakdown(
            subtotal=str(self.subtotal),
            platform_fee=str(self.platform_fee),
            total=str(self.total),
            interviewer_earnings=str(self.interviewer_earnings),
            currency=self.currency,
        )


def start_datetime(scheduled_date: date, scheduled_time: str) -> datetime:
    """Naive start datetime in the interviewer's timezone."""
    hours, minutes = scheduled_time.split(":")
    return datetime.combine(scheduled_date, time(int(hours), int(minutes)))
