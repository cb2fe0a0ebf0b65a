"""
Review API endpoints

Candidates review interviewers after a completed booking. Each booking can
be reviewed once; reviews cannot be edited.
"""

from fastapi import APIRouter, Depends, HTTPException

from interview_navigator.api.dependencies import get_review_service
from interview_navigator.api.errors import to_http_exception
from interview_navigator.core.exceptions import NavigatorError
from interview_navigator.core.review_service import ReviewService
from interview_navigator.models.review import Review, ReviewCreate

router = APIRouter()


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post("", response_model=Review, status_code=201)
async def submit_review(
    request: ReviewCreate,
    reviews: ReviewService = Depends(get_review_service),
) -> Review:
    """
    Submit a review for a completed booking.

    Returns 409 if the booking has already been reviewed.
    """
    try:
        return await reviews.submit_review(request)
    except NavigatorError as e:
        raise to_http_exception(e) from e


@router.get("/booking/{booking_id}", response_model=Review)
async def get_booking_review(
    booking_id: str,
    reviews: ReviewService = Depends(get_review_service),
) -> Review:
    review = await reviews.get_review_by_booking(booking_id)
    if review is None:
        raise HTTPException(status_code=404, detail="No review for this booking")
    return review


@router.get("/candidate/{candidate_id}", response_model=list[Review])
async def get_candidate_reviews(
    candidate_id: str,
    reviews: ReviewService = Depends(get_review_service),
) -> list[Review]:
    return await reviews.get_candidate_reviews(candidate_id)


@router.delete("/{review_id}", status_code=204)
async def delete_review(
    review_id: str,
    reviews: ReviewService = Depends(get_review_service),
) -> None:
    """Administrative removal; the interviewer's rating is recomputed."""
    try:
        await reviews.delete_review(review_id)
    except NavigatorError as e:
        raise to_http_exception(e) from e
