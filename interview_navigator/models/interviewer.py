"""
Interviewer profile models for Interview Navigator
"""

from datetime import datetime

from pydantic import BaseModel, Field

from interview_navigator.models.availability import AvailabilityRule


class InterviewerProfileCreate(BaseModel):
    """Profile data supplied when an interviewer signs up."""

    id: str | None = Field(
        default=None,
        description="Auth provider user id; generated when omitted"
    )
    name: str = Field(..., min_length=1)
    email: str | None = None

    # Marketplace listing
    title: str | None = None
    company: str | None = None
    bio: str | None = Field(default=None, max_length=2000)
    years_of_experience: int = Field(default=0, ge=0)
    specializations: list[str] = Field(default_factory=list)
    is_active: bool = True

    # 0 means "not set yet"; bookings require a positive rate
    hourly_rate: float = Field(default=0, ge=0, allow_inf_nan=False)
    currency: str = "USD"
    timezone: str = "UTC"

    availability: list[AvailabilityRule] = Field(default_factory=list)


class InterviewerProfile(InterviewerProfileCreate):
    """A stored interviewer profile."""

    id: str
    created_at: datetime
    updated_at: datetime


class InterviewerFilters(BaseModel):
    """Discovery filters; every filter left unset matches all interviewers."""

    specializations: list[str] = Field(
        default_factory=list,
        description="Match any, case-insensitive substring"
    )
    min_experience: int | None = Field(default=None, ge=0)
    min_rating: float | None = Field(default=None, ge=0, le=5, allow_inf_nan=False)
    max_hourly_rate: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    search: str | None = Field(
        default=None,
        description="Substring of name, email, title, company or bio"
    )


class InterviewerListing(BaseModel):
    """A profile joined with its rating summary."""

    profile: InterviewerProfile
    average_rating: float | None = Field(
        default=None, description="None until the first review"
    )
    total_reviews: int = 0


class InterviewerSearchResult(BaseModel):
    interviewers: list[InterviewerListing]
    has_more: bool
    next_offset: int | None = None


class InterviewerStats(BaseModel):
    """Booking and review counts for an interviewer's dashboard."""

    interviewer_id: str
    total_bookings: int
    completed_bookings: int
    average_rating: float | None = None
    total_reviews: int = 0
