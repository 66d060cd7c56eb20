"""
Billing enums - strongly typed enumerations for Creem events and local billing states.
"""

from enum import Enum


class UserSubscriptionStatus(str, Enum):
    """
    Local subscription status lifecycle.

    Flow: active -> cancelled -> expired
    Cancellation keeps the current period running; expiry ends it.
    """

    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


class BillingType(str, Enum):
    """How a Creem product is charged."""

    ONE_TIME = "one-time"
    RECURRING = "recurring"


class BillingInterval(str, Enum):
    """Length of a subscription or credit period."""

    MONTH = "month"
    YEAR = "year"


class CreemEventType(str, Enum):
    """Creem webhook event types."""

    # Handled
    CHECKOUT_COMPLETED = "checkout.completed"
    SUBSCRIPTION_PAID = "subscription.paid"
    SUBSCRIPTION_CANCELED = "subscription.canceled"
    SUBSCRIPTION_EXPIRED = "subscription.expired"

    # Delivered by Creem, acknowledged without local changes
    SUBSCRIPTION_ACTIVE = "subscription.active"
    SUBSCRIPTION_UPDATE = "subscription.update"
    SUBSCRIPTION_TRIALING = "subscription.trialing"
    REFUND_CREATED = "refund.created"
    DISPUTE_CREATED = "dispute.created"


class PaymentStatus(str, Enum):
    """Payment history status."""

    PENDING = "pending"
    COMPLETED = "completed"  # Written by the webhook on checkout.completed
    SUCCESS = "success"  # Legacy rows written before "completed" was used
    FAILED = "failed"

    @classmethod
    def successful(cls) -> tuple["PaymentStatus", ...]:
        """Statuses that count as a successful payment."""
        return (cls.COMPLETED, cls.SUCCESS)
