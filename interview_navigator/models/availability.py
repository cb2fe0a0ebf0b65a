"""
Availability models for Interview Navigator
"""

from datetime import date

from pydantic import BaseModel, Field


class AvailabilityRule(BaseModel):
    """
    Weekly availability window for an interviewer.

    Times are kept as raw "HH:MM" strings. Rules are validated when an
    interviewer saves them; readers tolerate malformed values.
    """

    day_of_week: int = Field(..., description="0 = Sunday ... 6 = Saturday")
    start_time: str = Field(..., examples=["09:00"])
    end_time: str = Field(..., examples=["17:00"])
    timezone: str = "UTC"


class DaySlots(BaseModel):
    """Bookable slots for one interviewer on one date."""

    interviewer_id: str
    date: date
    available: bool
    slots: list[str] = Field(default_factory=list)
    message: str
