"""
Core business logic modules for Interview Navigator

Contains:
- Pricing Calculator: Price split between interviewer and platform
- Availability: Slot derivation and booking conflict checks
- Rating Aggregator: Review statistics per interviewer
- Services: Interviewer, Booking and Review orchestration over the store
- Payment Client: Payments backend integration
"""

from interview_navigator.core.pricing_calculator import PricingCalculator, calculate_pricing
from interview_navigator.core.availability import derive_slots
from interview_navigator.core.rating_aggregator import aggregate_reviews
from interview_navigator.core.interviewer_service import InterviewerService
from interview_navigator.core.booking_service import BookingService
from interview_navigator.core.review_service import ReviewService
from interview_navigator.core.payment_client import PaymentClient

__all__ = [
    "PricingCalculator",
    "calculate_pricing",
    "derive_slots",
    "aggregate_reviews",
    "InterviewerService",
    "BookingService",
    "ReviewService",
    "PaymentClient",
]
