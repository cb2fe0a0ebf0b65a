"""
API Dependencies

Provides dependency injection for API endpoints.
Services are built once per application in the lifespan, kept on
`app.state.services`, and handed to endpoints through the accessors below.
"""

import logging
from dataclasses import dataclass

from fastapi import HTTPException, Request

from interview_navigator.config.settings import Settings
from interview_navigator.core.booking_service import BookingService
from interview_navigator.core.clock import Clock, utcnow
from interview_navigator.core.interviewer_service import InterviewerService
from interview_navigator.core.payment_client import PaymentClient
from interview_navigator.core.pricing_calculator import PricingCalculator
from interview_navigator.core.review_service import ReviewService
from interview_navigator.storage import DocumentStore, create_store

logger = logging.getLogger(__name__)


# ============================================================================
# SERVICE CONTAINER
# ============================================================================

@dataclass
class ServiceContainer:
    """Everything the endpoints need, wired to one document store."""

    store: DocumentStore
    pricing: PricingCalculator
    interviewers: InterviewerService
    bookings: BookingService
    reviews: ReviewService
    payments: PaymentClient | None = None


def build_services(
    settings: Settings,
    store: DocumentStore | None = None,
    clock: Clock = utcnow,
) -> ServiceContainer:
    """
    Wire the services for one application instance.

    Args:
        settings: Application settings
        store: Store to use instead of the configured backend
        clock: Time source shared by every service
    """
    store = store or create_store(settings)

    pricing = PricingCalculator(
        platform_fee_percent=settings.platform_fee_percent,
        default_currency=settings.default_currency,
    )
    interviewers = InterviewerService(
        store,
        slot_interval_minutes=settings.slot_interval_minutes,
        page_size=settings.interviewer_page_size,
        clock=clock,
    )
    bookings = BookingService(
        store,
        interviewers,
        pricing,
        min_duration_minutes=settings.min_booking_minutes,
        max_duration_minutes=settings.max_booking_minutes,
        clock=clock,
    )
    reviews = ReviewService(
        store,
        bookings,
        page_size=settings.review_page_size,
        clock=clock,
    )

    payments = None
    if settings.payments_enabled:
        payments = PaymentClient(
            settings.payments_backend_url,
            timeout=settings.payments_timeout_seconds,
        )
    else:
        logger.info("Payments backend URL not configured, payments disabled")

    return ServiceContainer(
        store=store,
        pricing=pricing,
        interviewers=interviewers,
        bookings=bookings,
        reviews=reviews,
        payments=payments,
    )


async def startup(services: ServiceContainer):
    """Create store indexes needed before serving requests."""
    await services.reviews.initialize()


async def shutdown(services: ServiceContainer):
    """Cleanup resources on shutdown."""
    if services.payments:
        await services.payments.close()
    await services.store.close()


# ============================================================================
# ACCESSORS
# ============================================================================

def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_pricing_calculator(request: Request) -> PricingCalculator:
    return get_services(request).pricing


def get_interviewer_service(request: Request) -> InterviewerService:
    return get_services(request).interviewers


def get_booking_service(request: Request) -> BookingService:
    return get_services(request).bookings


def get_review_service(request: Request) -> ReviewService:
    return get_services(request).reviews


def get_payment_client(request: Request) -> PaymentClient:
    """Payment client, or 503 when no payments backend is configured."""
    payments = get_services(request).payments
    if payments is None:
        raise HTTPException(status_code=503, detail="Payments are not configured")
    return payments
