"""
Rating Aggregator for Interview Navigator

Computes an interviewer's rating summary from their complete review set.
The summary is always rebuilt from scratch; there is no incremental update.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from interview_navigator.models.review import (
    Review,
    ReviewCategory,
    InterviewerRatingSummary,
)

RATING_VALUES = (1, 2, 3, 4, 5)
TENTH = Decimal("0.1")


def round1(numerator: int | Decimal, denominator: int | Decimal) -> float:
    """numerator / denominator rounded half-up to 1 decimal place."""
    value = Decimal(numerator) / Decimal(denominator)
    return float(value.quantize(TENTH, rounding=ROUND_HALF_UP))


def aggregate_reviews(
    interviewer_id: str,
    reviews: Sequence[Review],
    as_of: datetime,
) -> InterviewerRatingSummary | None:
    """
    Build the rating summary for one interviewer.

    Category averages are unrounded means over the reviews that rated the
    category; a category nobody rated is left out entirely.

    Args:
        interviewer_id: Interviewer the reviews belong to
        reviews: Every current review for that interviewer
        as_of: Timestamp recorded as `last_updated`

    Returns:
        InterviewerRatingSummary, or None when there are no reviews
        (callers show a "no reviews yet" state instead of a 0.0 average)
    """
    total_reviews = len(reviews)
    if total_reviews == 0:
        return None

    rating_total = sum(review.rating for review in reviews)

    distribution = {value: 0 for value in RATING_VALUES}
    for review in reviews:
        distribution[review.rating] += 1

    category_averages: dict[ReviewCategory, float] = {}
    for category in ReviewCategory:
        scores = [
            score for score in (
                review.categories.get(category) if review.categories else None
                for review in reviews
            )
            if score is not None
        ]
        if scores:
            category_averages[category] = sum(scores) / len(scores)

    recommend_count = sum(1 for review in reviews if review.would_recommend)

    return InterviewerRatingSummary(
        interviewer_id=interviewer_id,
        average_rating=round1(rating_total, total_reviews),
        total_reviews=total_reviews,
        rating_distribution=distribution,
        category_averages=category_averages,
        recommendation_rate=round1(100 * recommend_count, total_reviews),
        last_updated=as_of,
    )
