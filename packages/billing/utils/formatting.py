"""Display formatting for prices, billing periods and subscription statuses."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "CAD": "CA$",
    "AUD": "A$",
}

BILLING_PERIOD_DISPLAY = {
    "month": "month",
    "year": "year",
    "one-time": "one-time",
    "monthly": "month",
    "yearly": "year",
    "annual": "year",
}

SUBSCRIPTION_STATUS_DISPLAY = {
    "active": "Active",
    "canceled": "Canceled",
    "cancelled": "Canceled",
    "expired": "Expired",
    "pending": "Pending",
    "trialing": "Trial",
}


def format_money(amount: Union[int, float, Decimal], currency: str = "USD") -> str:
    """
    Format an amount with its currency symbol.

    Uses thousands separators and at most two fraction digits, dropping
    trailing zeros: 1000 -> "$1,000", 9.5 -> "$9.5", 10.256 -> "$10.26".
    """
    code = currency.upper()
    quantized = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    number = f"{quantized:,.2f}".rstrip("0").rstrip(".")

    sign = ""
    if number.startswith("-"):
        sign, number = "-", number[1:]

    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {number}"
    return f"{sign}{symbol}{number}"


def billing_period_display(period: str) -> str:
    """Normalise a billing period name; unknown values are returned unchanged."""
    return BILLING_PERIOD_DISPLAY.get(period.lower(), period)


def format_subscription_status(status: str) -> str:
    """Human readable subscription status; unknown values are returned unchanged."""
    return SUBSCRIPTION_STATUS_DISPLAY.get(status.lower(), status)
