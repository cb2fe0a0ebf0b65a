"""
Pricing and payment models for Interview Navigator
"""

from decimal import Decimal

from pydantic import BaseModel, Field, field_serializer


class PricingBreakdown(BaseModel):
    """
    Price split for a single booking.

    Amounts are decimals rounded to currency minor units; subtotal plus
    platform fee always equals total.
    """

    subtotal: Decimal
    platform_fee: Decimal
    total: Decimal
    interviewer_earnings: Decimal
    currency: str = "USD"

    @field_serializer("subtotal", "platform_fee", "total", "interviewer_earnings", when_used="json")
    def _serialize_amount(self, value: Decimal) -> float:
        return float(value)

    def booking_fields(self) -> dict[str, float | str]:
        """Plain numeric fields copied onto a booking record."""
        return {
            "subtotal": float(self.subtotal),
            "platform_fee": float(self.platform_fee),
            "total": float(self.total),
            "interviewer_earnings": float(self.interviewer_earnings),
            "currency": self.currency,
        }


class PaymentIntent(BaseModel):
    """Payment intent returned by the payments backend."""

    id: str
    client_secret: str
    amount: Decimal = Field(..., description="Amount in major currency units")
    currency: str
    status: str

    @field_serializer("amount", when_used="json")
    def _serialize_amount(self, value: Decimal) -> float:
        return float(value)


class EarningsSummary(BaseModel):
    """
    Interviewer earnings from booking snapshots.

    `paid_earnings` covers completed interviews, `pending_earnings` covers
    pending and confirmed ones; cancelled and no-show bookings earn nothing.
    """

    interviewer_id: str
    total_earnings: Decimal
    pending_earnings: Decimal
    paid_earnings: Decimal
    total_interviews: int = Field(..., description="Completed interviews")
    currency: str

    @field_serializer("total_earnings", "pending_earnings", "paid_earnings", when_used="json")
    def _serialize_amount(self, value: Decimal) -> float:
        return float(value)
