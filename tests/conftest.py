"""Shared fixtures: fixed clock, in-memory store, wired services and API client."""

from datetime import date, datetime, timedelta, timezone

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from interview_navigator.api.dependencies import build_services, shutdown, startup
from interview_navigator.config.settings import Settings
from interview_navigator.models.availability import AvailabilityRule
from interview_navigator.models.booking import BookingRequest
from interview_navigator.models.interviewer import InterviewerProfileCreate
from interview_navigator.storage import InMemoryDocumentStore

# Monday 1 January 2024, noon UTC
FIXED_NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

# A Monday one week after FIXED_NOW
NEXT_MONDAY = date(2024, 1, 8)

INTERVIEWER_ID = "interviewer-1"
CANDIDATE_ID = "candidate-1"


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, minutes: int = 1) -> None:
        self.now += timedelta(minutes=minutes)


def weekday_schedule(start: str = "09:00", end: str = "17:00") -> list[AvailabilityRule]:
    """Monday to Friday availability."""
    return [
        AvailabilityRule(day_of_week=day, start_time=start, end_time=end)
        for day in range(1, 6)
    ]


def booking_request(**overrides) -> BookingRequest:
    data = {
        "candidate_id": CANDIDATE_ID,
        "candidate_name": "Casey Candidate",
        "candidate_email": "casey@example.com",
        "interviewer_id": INTERVIEWER_ID,
        "scheduled_date": NEXT_MONDAY,
        "scheduled_time": "10:00",
        "duration_minutes": 45,
    }
    data.update(overrides)
    return BookingRequest(**data)


def make_settings(**overrides) -> Settings:
    return Settings(storage_backend="memory", payments_backend_url="", **overrides)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest_asyncio.fixture
async def services(store, clock):
    container = build_services(make_settings(), store=store, clock=clock)
    await startup(container)
    yield container
    await shutdown(container)


@pytest_asyncio.fixture
async def interviewer(services):
    """Interviewer charging 50 USD/hour, available weekdays 09:00-17:00."""
    return await services.interviewers.create_profile(
        InterviewerProfileCreate(
            id=INTERVIEWER_ID,
            name="Ivy Interviewer",
            email="ivy@example.com",
            hourly_rate=50,
            availability=weekday_schedule(),
        )
    )


@pytest.fixture
def completed_booking(services, interviewer):
    """Factory for bookings that have been held and can be reviewed."""

    async def _create(scheduled_time: str = "10:00", **overrides):
        booking = await services.bookings.create_booking(
            booking_request(scheduled_time=scheduled_time, **overrides)
        )
        await services.bookings.confirm(booking.id)
        return await services.bookings.complete(booking.id)

    return _create


@pytest.fixture
def app(clock):
    from main import create_app

    return create_app(make_settings(), store=InMemoryDocumentStore(), clock=clock)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
