"""
Pricing Calculator for Interview Navigator

Splits the price of a booking into the interviewer's earnings and the
platform fee. Every derived amount is rounded half-up to currency minor
units before it feeds the next step, so the displayed subtotal plus fee
always equals the displayed total.
"""

from decimal import Decimal, ROUND_HALF_UP

from interview_navigator.models.pricing import PricingBreakdown

CENT = Decimal("0.01")
DEFAULT_PLATFORM_FEE_PERCENT = Decimal("15")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
}


def _to_decimal(value: float | int | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps the literal the caller wrote (50.1, not 50.09999...)
    return Decimal(str(value))


def round2(value: float | int | Decimal) -> Decimal:
    """Round half-up to 2 decimal places."""
    return _to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def calculate_pricing(
    hourly_rate: float | Decimal,
    duration_minutes: int,
    currency: str = "USD",
    platform_fee_percent: float | Decimal = DEFAULT_PLATFORM_FEE_PERCENT,
) -> PricingBreakdown:
    """
    Compute the price split for a booking.

    Does not validate its inputs: callers reject zero or negative rates and
    durations before pricing. A zero rate or duration prices to zero.

    Args:
        hourly_rate: Interviewer's hourly rate in major currency units
        duration_minutes: Booking length
        currency: ISO currency code carried through to the breakdown
        platform_fee_percent: Platform commission on the subtotal

    Returns:
        PricingBreakdown with subtotal, fee, total and interviewer earnings
    """
    rate = _to_decimal(hourly_rate)
    fee_rate = _to_decimal(platform_fee_percent) / Decimal(100)

    subtotal = round2(rate * Decimal(duration_minutes) / Decimal(60))
    platform_fee = round2(subtotal * fee_rate)
    total = round2(subtotal + platform_fee)

    return PricingBreakdown(
        subtotal=subtotal,
        platform_fee=platform_fee,
        total=total,
        interviewer_earnings=subtotal,
        currency=currency,
    )


class PricingCalculator:
    """Pricing calculator bound to the configured platform fee."""

    def __init__(
        self,
        platform_fee_percent: float | Decimal = DEFAULT_PLATFORM_FEE_PERCENT,
        default_currency: str = "USD",
    ):
        self.platform_fee_percent = _to_decimal(platform_fee_percent)
        self.default_currency = default_currency

    def calculate(
        self,
        hourly_rate: float | Decimal,
        duration_minutes: int,
        currency: str | None = None,
    ) -> PricingBreakdown:
        return calculate_pricing(
            hourly_rate,
            duration_minutes,
            currency=currency or self.default_currency,
            platform_fee_percent=self.platform_fee_percent,
        )


def to_minor_units(amount: float | Decimal) -> int:
    """Convert an amount to integer minor units (cents) for the payment processor."""
    return int((round2(amount) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_minor_units(amount: int) -> Decimal:
    return (Decimal(amount) / Decimal(100)).quantize(CENT)


def format_currency(amount: float | Decimal, currency: str = "USD") -> str:
    """Display string for an amount, e.g. "$43.13" or "43.13 CHF"."""
    value = round2(amount)
    code = currency.upper()
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol:
        sign = "-" if value < 0 else ""
        return f"{sign}{symbol}{abs(value):,.2f}"
    return f"{value:,.2f} {code}"
