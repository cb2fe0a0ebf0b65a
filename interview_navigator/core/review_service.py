"""
Review Service for Interview Navigator

Handles review submission and keeps each interviewer's rating summary in
step with their reviews. The summary is recomputed from the full review
set after every insert or delete.

One review per booking is enforced by the store: reviews are created with
a conditional write (composite document id plus a unique index on
`booking_id`), so two racing submissions cannot both succeed.
"""

import logging

from interview_navigator.core.booking_service import BookingService
from interview_navigator.core.clock import Clock, utcnow
from interview_navigator.core.exceptions import (
    BookingNotReviewableError,
    ReviewAlreadyExistsError,
    ReviewNotFoundError,
)
from interview_navigator.core.rating_aggregator import aggregate_reviews
from interview_navigator.models.booking import BookingStatus
from interview_navigator.models.review import (
    Review,
    ReviewCreate,
    InterviewerRatingSummary,
    make_review_id,
)
from interview_navigator.storage.base import (
    DocumentStore,
    DocumentExistsError,
    REVIEWS,
    RATINGS,
)

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Orchestrates review I/O around the pure rating aggregator.

    Store errors other than a create collision are passed through as-is.
    """

    def __init__(
        self,
        store: DocumentStore,
        booking_service: BookingService,
        page_size: int = 50,
        clock: Clock = utcnow,
    ):
        self.store = store
        self.bookings = booking_service
        self.page_size = page_size
        self._clock = clock

    async def initialize(self) -> None:
        """Create the unique constraint backing one-review-per-booking."""
        await self.store.ensure_unique(REVIEWS, "booking_id")

    # =========================================================================
    # SUBMISSION
    # =========================================================================

    async def submit_review(self, review_input: ReviewCreate) -> Review:
        """
        Submit a candidate's review of a completed booking.

        Args:
            review_input: Validated review data

        Returns:
            The stored Review

        Raises:
            BookingNotFoundError: unknown booking
            BookingNotReviewableError: booking not completed, or the
                candidate/interviewer do not match the booking
            ReviewAlreadyExistsError: the booking already has a review
        """
        booking = await self.bookings.get_booking(review_input.booking_id)

        if booking.status != BookingStatus.COMPLETED:
            raise BookingNotReviewableError("Only completed interviews can be reviewed")
        if booking.candidate_id != review_input.candidate_id:
            raise BookingNotReviewableError("Only the candidate who booked this interview can review it")
        if booking.interviewer_id != review_input.interviewer_id:
            raise BookingNotReviewableError("Interviewer does not match this booking")

        existing = await self.get_review_by_booking(review_input.booking_id)
        if existing is not None:
            logger.warning(f"Duplicate review rejected for booking {review_input.booking_id}")
            raise ReviewAlreadyExistsError(review_input.booking_id)

        now = self._clock()
        review = Review(
            **review_input.model_dump(),
            id=make_review_id(
                review_input.interviewer_id,
                review_input.candidate_id,
                review_input.booking_id,
            ),
            created_at=now,
            updated_at=now,
        )

        try:
            await self.store.create(REVIEWS, review.id, review.model_dump(mode="json"))
        except DocumentExistsError as e:
            # Lost a race with a concurrent submission for the same booking
            logger.warning(f"Duplicate review rejected for booking {review.booking_id} (conditional create)")
            raise ReviewAlreadyExistsError(review.booking_id) from e

        await self.recompute_interviewer_rating(review.interviewer_id)

        logger.info(f"Review submitted: {review.id} (interviewer={review.interviewer_id})")
        return review

    async def delete_review(self, review_id: str) -> None:
        """Administrative removal of a review; re-aggregates the interviewer."""
        doc = await self.store.get(REVIEWS, review_id)
        if doc is None:
            raise ReviewNotFoundError(review_id)

        review = Review.model_validate(doc)
        await self.store.delete(REVIEWS, review_id)
        await self.recompute_interviewer_rating(review.interviewer_id)

        logger.info(f"Review deleted: {review_id}")

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_review_by_booking(self, booking_id: str) -> Review | None:
        docs = await self.store.find(REVIEWS, {"booking_id": booking_id}, limit=1)
        return Review.model_validate(docs[0]) if docs else None

    async def get_interviewer_reviews(
        self, interviewer_id: str, limit: int | None = None
    ) -> list[Review]:
        """Newest reviews first, capped at the page size."""
        docs = await self.store.find(
            REVIEWS,
            {"interviewer_id": interviewer_id},
            order_by="created_at",
            descending=True,
            limit=limit or self.page_size,
        )
        return [Review.model_validate(doc) for doc in docs]

    async def get_candidate_reviews(self, candidate_id: str) -> list[Review]:
        docs = await self.store.find(
            REVIEWS,
            {"candidate_id": candidate_id},
            order_by="created_at",
            descending=True,
        )
        return [Review.model_validate(doc) for doc in docs]

    async def get_interviewer_rating(self, interviewer_id: str) -> InterviewerRatingSummary | None:
        """
        Stored rating summary, rebuilding it if it has never been written.

        Returns None when the interviewer has no reviews yet.
        """
        doc = await self.store.get(RATINGS, interviewer_id)
        if doc is not None:
            return InterviewerRatingSummary.model_validate(doc)
        return await self.recompute_interviewer_rating(interviewer_id)

    # =========================================================================
    # AGGREGATION
    # =========================================================================

    async def recompute_interviewer_rating(
        self, interviewer_id: str
    ) -> InterviewerRatingSummary | None:
        """Rebuild the summary from every review of the interviewer."""
        docs = await self.store.find(REVIEWS, {"interviewer_id": interviewer_id})
        reviews = [Review.model_validate(doc) for doc in docs]

        summary = aggregate_reviews(interviewer_id, reviews, as_of=self._clock())
        if summary is None:
            await self.store.delete(RATINGS, interviewer_id)
            logger.info(f"No reviews to aggregate for {interviewer_id}")
            return None

        await self.store.set(RATINGS, interviewer_id, summary.model_dump(mode="json"))
        logger.info(
            f"Updated rating for {interviewer_id}: "
            f"average={summary.average_rating} reviews={summary.total_reviews}"
        )
        return summary
