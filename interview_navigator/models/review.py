"""
Review and rating summary models for Interview Navigator

Reviews are written by candidates once a booking is completed. The rating
summary is a materialized view recomputed from the full review set.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ReviewCategory(str, Enum):
    """Optional per-category review dimensions."""

    TECHNICAL = "technical"
    COMMUNICATION = "communication"
    PROFESSIONALISM = "professionalism"
    HELPFULNESS = "helpfulness"


class CategoryScores(BaseModel):
    """Category scores supplied with a review (each 1-5, all optional)."""

    technical: int | None = Field(default=None, ge=1, le=5)
    communication: int | None = Field(default=None, ge=1, le=5)
    professionalism: int | None = Field(default=None, ge=1, le=5)
    helpfulness: int | None = Field(default=None, ge=1, le=5)

    def get(self, category: ReviewCategory) -> int | None:
        return getattr(self, category.value)


class ReviewCreate(BaseModel):
    """Candidate-submitted review input."""

    interviewer_id: str = Field(..., min_length=1)
    candidate_id: str = Field(..., min_length=1)
    candidate_name: str | None = None
    booking_id: str = Field(..., min_length=1)

    rating: int = Field(..., ge=1, le=5, description="Overall star rating")
    comment: str | None = Field(default=None, max_length=2000)
    categories: CategoryScores | None = None
    would_recommend: bool


class Review(ReviewCreate):
    """A stored review. Reviews are never edited once created."""

    model_config = ConfigDict(frozen=True)

    id: str
    created_at: datetime
    updated_at: datetime


def make_review_id(interviewer_id: str, candidate_id: str, booking_id: str) -> str:
    """Composite document id; one candidate can review a booking once."""
    return f"{interviewer_id}_{candidate_id}_{booking_id}"


class InterviewerRatingSummary(BaseModel):
    """Aggregated rating statistics for one interviewer."""

    interviewer_id: str
    average_rating: float = Field(..., description="Mean rating, 1 decimal place")
    total_reviews: int
    rating_distribution: dict[int, int] = Field(
        ..., description="Star value (1-5) to review count"
    )
    category_averages: dict[ReviewCategory, float] = Field(
        default_factory=dict,
        description="Only categories rated by at least one review"
    )
    recommendation_rate: float = Field(
        ..., description="Percentage of reviewers who would recommend"
    )
    last_updated: datetime
