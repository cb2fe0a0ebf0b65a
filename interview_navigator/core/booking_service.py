"""
Booking Service for Interview Navigator

Creates bookings against an interviewer's availability, copies the price
breakdown onto the booking, and drives the booking status lifecycle:

    PENDING → CONFIRMED → COMPLETED
       ↓          ↓   ↘
    CANCELLED  CANCELLED  NO_SHOW

Pending and confirmed bookings can also be rescheduled, which returns them
to PENDING.

An active booking holds one claim document per slot boundary it covers.
Claims are conditional creates, so two overlapping requests racing past the
conflict check cannot both be stored.
"""

import logging
import math
from datetime import date, timedelta
from decimal import Decimal
from typing import Any
from uuid import uuid4

from interview_navigator.core.availability import find_conflicts, is_slot_available
from interview_navigator.core.clock import Clock, utcnow
from interview_navigator.core.exceptions import (
    BookingConflictError,
    BookingNotFoundError,
    BookingStateError,
    InvalidBookingError,
    SlotUnavailableError,
)
from interview_navigator.core.interviewer_service import InterviewerService
from interview_navigator.core.pricing_calculator import PricingCalculator, round2
from interview_navigator.models.booking import (
    Booking,
    BookingRequest,
    BookingStatus,
    CancelledBy,
    start_datetime,
)
from interview_navigator.models.interviewer import InterviewerProfile
from interview_navigator.models.pricing import EarningsSummary, PricingBreakdown
from interview_navigator.storage.base import (
    DocumentStore,
    DocumentExistsError,
    DocumentNotFoundError,
    BOOKINGS,
    SLOT_CLAIMS,
)

logger = logging.getLogger(__name__)


class BookingService:
    """Creates and transitions interview bookings."""

    # Statuses that hold the interviewer's time
    ACTIVE_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)

    # Statuses whose interviewer earnings count towards the earnings summary
    EARNING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.COMPLETED)

    CLAIM_ATTEMPTS = 3

    VALID_TRANSITIONS: dict[BookingStatus, list[BookingStatus]] = {
        BookingStatus.PENDING: [BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingStatus.PENDING],
        BookingStatus.CONFIRMED: [
            BookingStatus.COMPLETED,
            BookingStatus.CANCELLED,
            BookingStatus.NO_SHOW,
            BookingStatus.PENDING,
        ],
        BookingStatus.COMPLETED: [],
        BookingStatus.CANCELLED: [],
        BookingStatus.NO_SHOW: [],
    }

    def __init__(
        self,
        store: DocumentStore,
        interviewer_service: InterviewerService,
        pricing_calculator: PricingCalculator,
        min_duration_minutes: int = 15,
        max_duration_minutes: int = 180,
        clock: Clock = utcnow,
    ):
        self.store = store
        self.interviewers = interviewer_service
        self.pricing = pricing_calculator
        self.min_duration_minutes = min_duration_minutes
        self.max_duration_minutes = max_duration_minutes
        self._clock = clock

    # =========================================================================
    # PRICING
    # =========================================================================

    async def quote(self, interviewer_id: str, duration_minutes: int) -> PricingBreakdown:
        """Price a booking of `duration_minutes` with this interviewer."""
        profile = await self.interviewers.get_profile(interviewer_id)
        self._validate_pricing_inputs(profile, duration_minutes)
        return self.pricing.calculate(profile.hourly_rate, duration_minutes, profile.currency)

    def _validate_pricing_inputs(self, profile: InterviewerProfile, duration_minutes: int) -> None:
        if not self.min_duration_minutes <= duration_minutes <= self.max_duration_minutes:
            raise InvalidBookingError(
                f"Duration must be {self.min_duration_minutes}-{self.max_duration_minutes} minutes"
            )
        if not math.isfinite(profile.hourly_rate) or profile.hourly_rate <= 0:
            raise InvalidBookingError("Interviewer has not set an hourly rate")

    # =========================================================================
    # BOOKING CREATION
    # =========================================================================

    async def create_booking(self, request: BookingRequest) -> Booking:
        """
        Create a pending booking.

        The requested start time must be one of the interviewer's derived
        slots for that date and must not overlap another active booking.

        Raises:
            InterviewerNotFoundError: unknown interviewer
            InvalidBookingError: bad duration, missing rate, or past date
            SlotUnavailableError: time outside the interviewer's availability
            BookingConflictError: overlaps a pending/confirmed booking
        """
        profile = await self.interviewers.get_profile(request.interviewer_id)
        self._validate_pricing_inputs(profile, request.duration_minutes)
        await self._check_schedulable(
            profile,
            request.scheduled_date,
            request.scheduled_time,
            request.duration_minutes,
        )

        pricing = self.pricing.calculate(
            profile.hourly_rate, request.duration_minutes, profile.currency
        )

        now = self._clock()
        booking = Booking(
            id=str(uuid4()),
            **request.model_dump(),
            interviewer_name=profile.name,
            status=BookingStatus.PENDING,
            **pricing.booking_fields(),
            created_at=now,
            updated_at=now,
        )
        await self.store.create(BOOKINGS, booking.id, booking.model_dump(mode="json"))
        try:
            await self._claim_slots(booking.id, booking.interviewer_id, self._booking_slot_keys(booking))
        except BookingConflictError as e:
            await self.store.delete(BOOKINGS, booking.id)
            logger.warning(
                f"Rejected booking for {profile.id}: slot already claimed by {e.conflicting_ids}"
            )
            raise

        logger.info(
            f"Created booking {booking.id}: candidate={booking.candidate_id} "
            f"interviewer={booking.interviewer_id} total={booking.total} {booking.currency}"
        )
        return booking

    async def _check_schedulable(
        self,
        profile: InterviewerProfile,
        scheduled_date: date,
        scheduled_time: str,
        duration_minutes: int,
        exclude_booking_id: str | None = None,
    ) -> None:
        if scheduled_date < self._clock().date():
            raise InvalidBookingError("Bookings cannot be made for past dates")

        if not is_slot_available(
            profile.availability,
            scheduled_date,
            scheduled_time,
            self.interviewers.slot_interval_minutes,
        ):
            logger.warning(
                f"Rejected booking for {profile.id}: {scheduled_date} {scheduled_time} not available"
            )
            raise SlotUnavailableError(
                "The selected time is not available. Please choose one of the offered time slots."
            )

        conflicts = await self.check_conflicts(
            profile.id, scheduled_date, scheduled_time, duration_minutes, exclude_booking_id
        )
        if conflicts:
            logger.warning(
                f"Rejected booking for {profile.id}: conflicts with {[b.id for b in conflicts]}"
            )
            raise BookingConflictError([b.id for b in conflicts])

    async def check_conflicts(
        self,
        interviewer_id: str,
        scheduled_date: date,
        scheduled_time: str,
        duration_minutes: int,
        exclude_booking_id: str | None = None,
    ) -> list[Booking]:
        """Active bookings of the interviewer overlapping the given time."""
        docs = await self.store.find(
            BOOKINGS,
            {
                "interviewer_id": interviewer_id,
                "status": [status.value for status in self.ACTIVE_STATUSES],
            },
        )
        active = [
            Booking.model_validate(doc) for doc in docs
            if doc.get("id") != exclude_booking_id
        ]

        starts_at = start_datetime(scheduled_date, scheduled_time)
        return find_conflicts(starts_at, duration_minutes, active)

    # =========================================================================
    # SLOT CLAIMS
    # =========================================================================

    def _slot_keys(
        self,
        interviewer_id: str,
        scheduled_date: date,
        scheduled_time: str,
        duration_minutes: int,
    ) -> list[str]:
        """One key per slot boundary inside [start, start + duration)."""
        starts_at = start_datetime(scheduled_date, scheduled_time)
        step = self.interviewers.slot_interval_minutes
        return [
            f"{interviewer_id}_{starts_at + timedelta(minutes=offset):%Y-%m-%dT%H:%M}"
            for offset in range(0, duration_minutes, step)
        ]

    def _booking_slot_keys(self, booking: Booking) -> list[str]:
        return self._slot_keys(
            booking.interviewer_id,
            booking.scheduled_date,
            booking.scheduled_time,
            booking.duration_minutes,
        )

    async def _claim_slots(self, booking_id: str, interviewer_id: str, keys: list[str]) -> list[str]:
        """
        Claim every key for the booking, all or nothing.

        Keys the booking already holds are kept as they are. Returns the keys
        claimed by this call.

        Raises:
            BookingConflictError: a key is held by another active booking
        """
        claimed: list[str] = []
        try:
            for key in keys:
                if await self._claim_slot(key, booking_id, interviewer_id):
                    claimed.append(key)
        except BookingConflictError:
            await self._release_slots(booking_id, claimed)
            raise
        return claimed

    async def _claim_slot(self, key: str, booking_id: str, interviewer_id: str) -> bool:
        claim = {"booking_id": booking_id, "interviewer_id": interviewer_id}

        for _ in range(self.CLAIM_ATTEMPTS):
            try:
                await self.store.create(SLOT_CLAIMS, key, claim)
                return True
            except DocumentExistsError:
                existing = await self.store.get(SLOT_CLAIMS, key)

            if existing is None:
                continue
            owner = existing.get("booking_id")
            if owner == booking_id:
                return False
            if await self._holds_time(owner):
                raise BookingConflictError([owner])

            # Owner is cancelled, finished or gone
            if await self.store.delete(SLOT_CLAIMS, key, expected={"booking_id": owner}):
                logger.info(f"Released stale slot claim {key} held by {owner}")

        raise BookingConflictError([])

    async def _release_slots(self, booking_id: str, keys: list[str]) -> None:
        for key in keys:
            await self.store.delete(SLOT_CLAIMS, key, expected={"booking_id": booking_id})

    async def _holds_time(self, booking_id: str | None) -> bool:
        if booking_id is None:
            return False
        doc = await self.store.get(BOOKINGS, booking_id)
        return doc is not None and doc.get("status") in [s.value for s in self.ACTIVE_STATUSES]

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_booking(self, booking_id: str) -> Booking:
        doc = await self.store.get(BOOKINGS, booking_id)
        if doc is None:
            raise BookingNotFoundError(booking_id)
        return Booking.model_validate(doc)

    async def list_bookings(
        self,
        user_id: str,
        statuses: list[BookingStatus] | None = None,
    ) -> list[Booking]:
        """Bookings where the user is the candidate or the interviewer."""
        filters: dict[str, Any] = {}
        if statuses:
            filters["status"] = [status.value for status in statuses]

        as_candidate = await self.store.find(BOOKINGS, {**filters, "candidate_id": user_id})
        as_interviewer = await self.store.find(BOOKINGS, {**filters, "interviewer_id": user_id})

        bookings: dict[str, Booking] = {}
        for doc in as_candidate + as_interviewer:
            booking = Booking.model_validate(doc)
            bookings[booking.id] = booking

        return sorted(bookings.values(), key=lambda b: b.starts_at)

    async def get_interviewer_earnings(
        self,
        interviewer_id: str,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> EarningsSummary:
        """
        Sum the interviewer's earnings from booking pricing snapshots.

        Completed bookings count as paid, pending and confirmed ones as
        pending. Only bookings in the profile's current currency are summed.

        Args:
            interviewer_id: Interviewer to summarise
            start_date: First scheduled date to include
            end_date: Last scheduled date to include
        """
        profile = await self.interviewers.get_profile(interviewer_id)
        docs = await self.store.find(
            BOOKINGS,
            {
                "interviewer_id": interviewer_id,
                "status": [status.value for status in self.EARNING_STATUSES],
            },
        )

        paid = pending = Decimal("0")
        completed = 0
        for doc in docs:
            booking = Booking.model_validate(doc)
            if start_date and booking.scheduled_date < start_date:
                continue
            if end_date and booking.scheduled_date > end_date:
                continue
            if booking.currency != profile.currency:
                logger.warning(
                    f"Skipping booking {booking.id} in {booking.currency} for "
                    f"{profile.currency} earnings of {interviewer_id}"
                )
                continue

            earnings = booking.pricing().interviewer_earnings
            if booking.status == BookingStatus.COMPLETED:
                paid += earnings
                completed += 1
            else:
                pending += earnings

        return EarningsSummary(
            interviewer_id=interviewer_id,
            total_earnings=round2(paid + pending),
            pending_earnings=round2(pending),
            paid_earnings=round2(paid),
            total_interviews=completed,
            currency=profile.currency,
        )

    # =========================================================================
    # STATUS TRANSITIONS
    # =========================================================================

    async def confirm(self, booking_id: str) -> Booking:
        return await self._transition(booking_id, BookingStatus.CONFIRMED)

    async def complete(self, booking_id: str) -> Booking:
        return await self._transition(booking_id, BookingStatus.COMPLETED)

    async def mark_no_show(self, booking_id: str) -> Booking:
        return await self._transition(booking_id, BookingStatus.NO_SHOW)

    async def cancel(
        self,
        booking_id: str,
        cancelled_by: CancelledBy,
        reason: str | None = None,
    ) -> Booking:
        return await self._transition(
            booking_id,
            BookingStatus.CANCELLED,
            cancelled_by=cancelled_by.value,
            cancellation_reason=reason,
        )

    async def reschedule(
        self,
        booking_id: str,
        scheduled_date: date,
        scheduled_time: str,
    ) -> Booking:
        """Move a booking to a new slot; it returns to PENDING."""
        booking = await self.get_booking(booking_id)
        self._check_transition(booking, BookingStatus.PENDING)

        profile = await self.interviewers.get_profile(booking.interviewer_id)
        await self._check_schedulable(
            profile,
            scheduled_date,
            scheduled_time,
            booking.duration_minutes,
            exclude_booking_id=booking.id,
        )

        new_keys = self._slot_keys(
            booking.interviewer_id, scheduled_date, scheduled_time, booking.duration_minutes
        )
        claimed = await self._claim_slots(booking.id, booking.interviewer_id, new_keys)
        try:
            updated = await self._transition(
                booking_id,
                BookingStatus.PENDING,
                scheduled_date=scheduled_date.isoformat(),
                scheduled_time=scheduled_time,
            )
        except BookingStateError:
            await self._release_slots(booking.id, claimed)
            raise

        old_keys = [key for key in self._booking_slot_keys(booking) if key not in new_keys]
        await self._release_slots(booking.id, old_keys)
        return updated

    async def attach_payment_intent(self, booking_id: str, payment_intent_id: str) -> Booking:
        return await self._update(booking_id, {"payment_intent_id": payment_intent_id})

    def _check_transition(self, booking: Booking, target: BookingStatus) -> None:
        if target not in self.VALID_TRANSITIONS.get(booking.status, []):
            raise BookingStateError(
                f"Cannot move booking from {booking.status.value} to {target.value}"
            )

    async def _transition(
        self,
        booking_id: str,
        target: BookingStatus,
        **updates: Any,
    ) -> Booking:
        booking = await self.get_booking(booking_id)
        self._check_transition(booking, target)

        updated = await self._update(booking_id, {"status": target.value, **updates})
        if target not in self.ACTIVE_STATUSES:
            await self._release_slots(booking_id, self._booking_slot_keys(updated))
        logger.info(f"Booking {booking_id}: {booking.status.value} → {target.value}")
        return updated

    async def _update(self, booking_id: str, fields: dict[str, Any]) -> Booking:
        fields = {**fields, "updated_at": self._clock().isoformat()}
        try:
            doc = await self.store.update(BOOKINGS, booking_id, fields)
        except DocumentNotFoundError as e:
            raise BookingNotFoundError(booking_id) from e
        return Booking.model_validate(doc)
