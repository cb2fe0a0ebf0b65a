"""
Data models and schemas for Interview Navigator

Contains Pydantic models for:
- Reviews and interviewer rating summaries
- Availability rules
- Pricing breakdowns, payment intents and earnings
- Bookings
- Interviewer profiles, discovery and stats
"""

from interview_navigator.models.review import (
    Review,
    ReviewCreate,
    ReviewCategory,
    CategoryScores,
    InterviewerRatingSummary,
    make_review_id,
)
from interview_navigator.models.availability import AvailabilityRule, DaySlots
from interview_navigator.models.pricing import PricingBreakdown, PaymentIntent, EarningsSummary
from interview_navigator.models.booking import (
    Booking,
    BookingRequest,
    BookingStatus,
    CancelledBy,
)
from interview_navigator.models.interviewer import (
    InterviewerProfile,
    InterviewerProfileCreate,
    InterviewerFilters,
    InterviewerListing,
    InterviewerSearchResult,
    InterviewerStats,
)

__all__ = [
    # Review
    "Review",
    "ReviewCreate",
    "ReviewCategory",
    "CategoryScores",
    "InterviewerRatingSummary",
    "make_review_id",
    # Availability
    "AvailabilityRule",
    "DaySlots",
    # Pricing
    "PricingBreakdown",
    "PaymentIntent",
    "EarningsSummary",
    # Booking
    "Booking",
    "BookingRequest",
    "BookingStatus",
    "CancelledBy",
    # Interviewer
    "InterviewerProfile",
    "InterviewerProfileCreate",
    "InterviewerFilters",
    "InterviewerListing",
    "InterviewerSearchResult",
    "InterviewerStats",
]
