"""
Interviewer API endpoints

Handles interviewer profiles:
- Creating, reading and discovering profiles
- Hourly rate and weekly availability
- Bookable slots for a date
- Rating summary and reviews
- Booking stats and earnings
"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from interview_navigator.api.dependencies import (
    get_booking_service,
    get_interviewer_service,
    get_review_service,
)
from interview_navigator.api.errors import to_http_exception
from interview_navigator.core.booking_service import BookingService
from interview_navigator.core.exceptions import NavigatorError
from interview_navigator.core.interviewer_service import InterviewerService
from interview_navigator.core.review_service import ReviewService
from interview_navigator.models.availability import AvailabilityRule, DaySlots
from interview_navigator.models.interviewer import (
    InterviewerFilters,
    InterviewerProfile,
    InterviewerProfileCreate,
    InterviewerSearchResult,
    InterviewerStats,
)
from interview_navigator.models.pricing import EarningsSummary
from interview_navigator.models.review import InterviewerRatingSummary, Review

router = APIRouter()


# ============================================================================
# REQUEST/RESPONSE MODELS
# ============================================================================

class AvailabilityUpdate(BaseModel):
    """Replacement weekly schedule."""
    availability: list[AvailabilityRule]


class RateUpdate(BaseModel):
    """New hourly rate, optionally in a new currency."""
    hourly_rate: float = Field(..., gt=0, allow_inf_nan=False)
    currency: str | None = None


class RatingResponse(BaseModel):
    """Rating summary; `summary` is null until the first review."""
    interviewer_id: str
    has_reviews: bool
    summary: InterviewerRatingSummary | None = None


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("", response_model=InterviewerProfile, status_code=201)
async def create_interviewer(
    request: InterviewerProfileCreate,
    interviewers: InterviewerService = Depends(get_interviewer_service),
) -> InterviewerProfile:
    try:
        return await interviewers.create_profile(request)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.get("", response_model=InterviewerSearchResult)
async def list_interviewers(
    specializations: list[str] | None = Query(default=None),
    min_experience: int | None = Query(default=None, ge=0),
    min_rating: float | None = Query(default=None, ge=0, le=5, allow_inf_nan=False),
    max_hourly_rate: float | None = Query(default=None, ge=0, allow_inf_nan=False),
    search: str | None = None,
    limit: int | None = Query(default=None, gt=0, le=100),
    offset: int = Query(default=0, ge=0),
    interviewers: InterviewerService = Depends(get_interviewer_service),
) -> InterviewerSearchResult:
    """
    Discover active interviewers, best rated first.

    `specializations` may be repeated; a profile matches if any of them is
    part of one of its specializations.
    """
    filters = InterviewerFilters(
        specializations=specializations or [],
        min_experience=min_experience,
        min_rating=min_rating,
        max_hourly_rate=max_hourly_rate,
        search=search,
    )
    return await interviewers.list_interviewers(filters, limit=limit, offset=offset)


@router.get("/{interviewer_id}", response_model=InterviewerProfile)
async def get_interviewer(
    interviewer_id: str,
    interviewers: InterviewerService = Depends(get_interviewer_service),
) -> InterviewerProfile:
    try:
        return await interviewers.get_profile(interviewer_id)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.put("/{interviewer_id}/availability", response_model=InterviewerProfile)
async def update_availability(
    interviewer_id: str,
    request: AvailabilityUpdate,
    interviewers: InterviewerService = Depends(get_interviewer_service),
) -> InterviewerProfile:
    """Replace the interviewer's weekly availability."""
    try:
        return await interviewers.set_availability(interviewer_id, request.availability)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.put("/{interviewer_id}/rate", response_model=InterviewerProfile)
async def update_rate(
    interviewer_id: str,
    request: RateUpdate,
    interviewers: InterviewerService = Depends(get_interviewer_service),
) -> InterviewerProfile:
    try:
        return await interviewers.set_rate(interviewer_id, request.hourly_rate, request.currency)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.get("/{interviewer_id}/slots", response_model=DaySlots)
async def get_slots(
    interviewer_id: str,
    on_date: date = Query(..., alias="date"),
    interviewers: InterviewerService = Depends(get_interviewer_service),
) -> DaySlots:
    """
    Bookable start times for a date.

    A day without availability returns `available: false` and a message
    rather than an error.
    """
    try:
        return await interviewers.get_slots(interviewer_id, on_date)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.get("/{interviewer_id}/rating", response_model=RatingResponse)
async def get_rating(
    interviewer_id: str,
    interviewers: InterviewerService = Depends(get_interviewer_service),
    reviews: ReviewService = Depends(get_review_service),
) -> RatingResponse:
    """
    Rating summary for an interviewer.

    Not read-only: when no stored summary exists it is rebuilt from the
    reviews and written back (or removed if there are no reviews).
    """
    try:
        await interviewers.get_profile(interviewer_id)
    except NavigatorError as e:
        raise to_http_exception(e) from e

    summary = await reviews.get_interviewer_rating(interviewer_id)
    return RatingResponse(
        interviewer_id=interviewer_id,
        has_reviews=summary is not None,
        summary=summary,
    )


@router.get("/{interviewer_id}/reviews", response_model=list[Review])
async def get_reviews(
    interviewer_id: str,
    limit: int | None = Query(default=None, gt=0, le=200),
    reviews: ReviewService = Depends(get_review_service),
) -> list[Review]:
    """Newest reviews first."""
    return await reviews.get_interviewer_reviews(interviewer_id, limit=limit)


@router.get("/{interviewer_id}/stats", response_model=InterviewerStats)
async def get_stats(
    interviewer_id: str,
    interviewers: InterviewerService = Depends(get_interviewer_service),
) -> InterviewerStats:
    try:
        return await interviewers.get_interviewer_stats(interviewer_id)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.get("/{interviewer_id}/earnings", response_model=EarningsSummary)
async def get_earnings(
    interviewer_id: str,
    start_date: date | None = None,
    end_date: date | None = None,
    bookings: BookingService = Depends(get_booking_service),
) -> EarningsSummary:
    """Paid (completed) and pending (pending or confirmed) earnings, by scheduled date."""
    try:
        return await bookings.get_interviewer_earnings(interviewer_id, start_date, end_date)
    except NavigatorError as e:
        raise to_http_exception(e) from e
