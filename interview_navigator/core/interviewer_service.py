"""
Interviewer Service for Interview Navigator

Owns interviewer profiles: creation, hourly rate, and the weekly
availability schedule. Availability is validated here, at write time, so
the slot deriver can stay lenient when reading.

Also serves marketplace discovery (profiles joined with their rating
summaries) and per-interviewer booking stats.
"""

import logging
import math
from datetime import date
from uuid import uuid4

from interview_navigator.core.availability import (
    derive_slots,
    describe_day,
    validate_schedule,
)
from interview_navigator.core.clock import Clock, utcnow
from interview_navigator.core.exceptions import (
    InterviewerAlreadyExistsError,
    InterviewerNotFoundError,
    InvalidBookingError,
)
from interview_navigator.models.availability import AvailabilityRule, DaySlots
from interview_navigator.models.interviewer import (
    InterviewerProfile,
    InterviewerProfileCreate,
    InterviewerFilters,
    InterviewerListing,
    InterviewerSearchResult,
    InterviewerStats,
)
from interview_navigator.storage.base import (
    DocumentStore,
    DocumentExistsError,
    DocumentNotFoundError,
    INTERVIEWERS,
    BOOKINGS,
    RATINGS,
)

logger = logging.getLogger(__name__)


class InterviewerService:
    """Reads and writes interviewer profiles in the document store."""

    def __init__(
        self,
        store: DocumentStore,
        slot_interval_minutes: int = 15,
        page_size: int = 10,
        clock: Clock = utcnow,
    ):
        self.store = store
        self.slot_interval_minutes = slot_interval_minutes
        self.page_size = page_size
        self._clock = clock

    async def create_profile(self, data: InterviewerProfileCreate) -> InterviewerProfile:
        """
        Create an interviewer profile.

        Raises:
            InvalidAvailabilityError: if any availability rule is invalid
            InterviewerAlreadyExistsError: if the id is taken
        """
        validate_schedule(data.availability)

        now = self._clock()
        profile = InterviewerProfile(
            **data.model_dump(exclude={"id"}),
            id=data.id or str(uuid4()),
            created_at=now,
            updated_at=now,
        )

        try:
            await self.store.create(INTERVIEWERS, profile.id, profile.model_dump(mode="json"))
        except DocumentExistsError as e:
            raise InterviewerAlreadyExistsError(profile.id) from e

        logger.info(f"Created interviewer profile: {profile.id}")
        return profile

    async def get_profile(self, interviewer_id: str) -> InterviewerProfile:
        doc = await self.store.get(INTERVIEWERS, interviewer_id)
        if doc is None:
            raise InterviewerNotFoundError(interviewer_id)
        return InterviewerProfile.model_validate(doc)

    async def set_availability(
        self, interviewer_id: str, rules: list[AvailabilityRule]
    ) -> InterviewerProfile:
        """Replace the interviewer's weekly schedule."""
        validate_schedule(rules)
        profile = await self._update(
            interviewer_id,
            {"availability": [rule.model_dump(mode="json") for rule in rules]},
        )
        logger.info(f"Updated availability for {interviewer_id}: {len(rules)} day(s)")
        return profile

    async def set_rate(
        self, interviewer_id: str, hourly_rate: float, currency: str | None = None
    ) -> InterviewerProfile:
        if not math.isfinite(hourly_rate) or hourly_rate <= 0:
            raise InvalidBookingError("Hourly rate must be a positive number")

        fields: dict = {"hourly_rate": hourly_rate}
        if currency:
            fields["currency"] = currency.upper()
        profile = await self._update(interviewer_id, fields)
        logger.info(f"Updated hourly rate for {interviewer_id}: {hourly_rate}")
        return profile

    async def get_slots(self, interviewer_id: str, on_date: date) -> DaySlots:
        """Bookable slots for a date, with an explicit unavailable state."""
        profile = await self.get_profile(interviewer_id)
        slots = derive_slots(profile.availability, on_date, self.slot_interval_minutes)

        return DaySlots(
            interviewer_id=interviewer_id,
            date=on_date,
            available=bool(slots),
            slots=slots,
            message=describe_day(profile.availability, on_date),
        )

    # =========================================================================
    # DISCOVERY
    # =========================================================================

    async def list_interviewers(
        self,
        filters: InterviewerFilters | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> InterviewerSearchResult:
        """
        Active interviewers matching the filters, best rated first.

        Interviewers without reviews sort last and count as rating 0 for
        `min_rating`. An unset hourly rate (0) passes `max_hourly_rate`.

        Args:
            filters: Discovery filters
            limit: Page size (defaults to the configured page size)
            offset: Number of matches to skip

        Returns:
            InterviewerSearchResult with `has_more` and the next offset
        """
        filters = filters or InterviewerFilters()
        limit = limit or self.page_size

        docs = await self.store.find(INTERVIEWERS, {"is_active": True})
        profiles = [InterviewerProfile.model_validate(doc) for doc in docs]

        ratings: dict[str, dict] = {}
        if profiles:
            rating_docs = await self.store.find(
                RATINGS, {"interviewer_id": [profile.id for profile in profiles]}
            )
            ratings = {doc["interviewer_id"]: doc for doc in rating_docs}

        listings = [
            InterviewerListing(
                profile=profile,
                average_rating=ratings.get(profile.id, {}).get("average_rating"),
                total_reviews=ratings.get(profile.id, {}).get("total_reviews", 0),
            )
            for profile in profiles
        ]
        matches = [listing for listing in listings if _matches_filters(listing, filters)]
        matches.sort(key=lambda l: (-(l.average_rating or 0), l.profile.name.lower(), l.profile.id))

        page = matches[offset:offset + limit]
        has_more = len(matches) > offset + limit

        logger.info(f"Interviewer search: {len(matches)} match(es), returning {len(page)}")
        return InterviewerSearchResult(
            interviewers=page,
            has_more=has_more,
            next_offset=offset + limit if has_more else None,
        )

    async def get_interviewer_stats(self, interviewer_id: str) -> InterviewerStats:
        """Booking counts plus the stored rating summary, if any."""
        await self.get_profile(interviewer_id)

        bookings = await self.store.find(BOOKINGS, {"interviewer_id": interviewer_id})
        rating = await self.store.get(RATINGS, interviewer_id) or {}

        return InterviewerStats(
            interviewer_id=interviewer_id,
            total_bookings=len(bookings),
            completed_bookings=sum(1 for doc in bookings if doc.get("status") == "completed"),
            average_rating=rating.get("average_rating"),
            total_reviews=rating.get("total_reviews", 0),
        )

    async def _update(self, interviewer_id: str, fields: dict) -> InterviewerProfile:
        fields = {**fields, "updated_at": self._clock().isoformat()}
        try:
            doc = await self.store.update(INTERVIEWERS, interviewer_id, fields)
        except DocumentNotFoundError as e:
            raise InterviewerNotFoundError(interviewer_id) from e
        return InterviewerProfile.model_validate(doc)


def _matches_filters(listing: InterviewerListing, filters: InterviewerFilters) -> bool:
    profile = listing.profile

    if filters.specializations:
        specs = [spec.lower() for spec in profile.specializations]
        wanted = [spec.lower() for spec in filters.specializations]
        if not any(w in spec for w in wanted for spec in specs):
            return False

    if filters.min_experience is not None and profile.years_of_experience < filters.min_experience:
        return False

    if filters.min_rating is not None and (listing.average_rating or 0) < filters.min_rating:
        return False

    if filters.max_hourly_rate is not None and profile.hourly_rate > filters.max_hourly_rate:
        return False

    if filters.search:
        term = filters.search.lower()
        fields = (profile.name, profile.email, profile.title, profile.company, profile.bio)
        if not any(term in value.lower() for value in fields if value):
            return False

    return True
