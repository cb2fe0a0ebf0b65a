"""
Payment Client for Interview Navigator

Thin async HTTP client for the payments backend, which owns the payment
processor integration. Amounts cross the wire in integer minor units
with lowercase currency codes.
"""

import logging
from decimal import Decimal
from typing import Any

import httpx

from interview_navigator.core.exceptions import PaymentError
from interview_navigator.core.pricing_calculator import from_minor_units, to_minor_units
from interview_navigator.models.pricing import PaymentIntent, PricingBreakdown

logger = logging.getLogger(__name__)


class PaymentClient:
    """
    Client for the payments backend.

    Every failure (transport error or non-2xx response) surfaces as a
    PaymentError; nothing is retried.
    """

    CREATE_INTENT_PATH = "/api/payments/create-intent"
    REFUND_PATH = "/api/payments/refund"

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")

        # HTTP client for backend calls
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self.client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Payments backend unreachable ({path}): {e}")
            raise PaymentError("Payments backend is unavailable") from e

        if response.is_error:
            message = _error_message(response)
            logger.error(f"Payments backend error {response.status_code} ({path}): {message}")
            raise PaymentError(message)

        return response.json()

    async def create_payment_intent(
        self,
        booking_id: str,
        breakdown: PricingBreakdown,
        metadata: dict[str, str] | None = None,
    ) -> PaymentIntent:
        """
        Create a payment intent for a booking's total.

        Args:
            booking_id: Booking being paid for
            breakdown: Pricing copied from the booking
            metadata: Extra metadata forwarded to the processor

        Returns:
            PaymentIntent with the amount back in major units
        """
        payload = {
            "bookingId": booking_id,
            "amount": to_minor_units(breakdown.total),
            "currency": breakdown.currency.lower(),
            "metadata": {"bookingId": booking_id, **(metadata or {})},
        }
        data = await self._post(self.CREATE_INTENT_PATH, payload)

        try:
            intent = PaymentIntent(
                id=data["id"],
                client_secret=data["clientSecret"],
                amount=from_minor_units(int(data["amount"])),
                currency=str(data["currency"]).upper(),
                status=data["status"],
            )
        except (KeyError, TypeError, ValueError) as e:
            raise PaymentError("Malformed payment intent response") from e

        logger.info(f"Payment intent created for booking {booking_id}: {intent.id}")
        return intent

    async def process_refund(
        self,
        booking_id: str,
        amount: Decimal | float | None = None,
        reason: str | None = None,
    ) -> str:
        """
        Refund a booking, fully or partially.

        Returns:
            The refund id reported by the backend
        """
        payload: dict[str, Any] = {"bookingId": booking_id}
        if amount is not None:
            payload["amount"] = to_minor_units(amount)
        if reason:
            payload["reason"] = reason

        data = await self._post(self.REFUND_PATH, payload)

        refund_id = data.get("refundId")
        if not refund_id:
            raise PaymentError("Refund response did not include a refund id")

        logger.info(f"Refund processed for booking {booking_id}: {refund_id}")
        return refund_id


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"Payments backend returned {response.status_code}"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Payments backend returned {response.status_code}"
