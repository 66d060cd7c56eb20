"""Domain models for billing."""

from packages.billing.models.domain.enums import (
    UserSubscriptionStatus,
    BillingType,
    BillingInterval,
    CreemEventType,
    PaymentStatus,
)
from packages.billing.models.domain.credit_usage import (
    CreditUsage,
    CreditUsageCreateModel,
    CreditUsageUpdateModel,
)
from packages.billing.models.domain.user_subscription import (
    UserSubscription,
    UserSubscriptionCreateModel,
    UserSubscriptionUpdateModel,
)
from packages.billing.models.domain.payment_history import (
    PaymentHistory,
    PaymentHistoryCreateModel,
    PaymentHistoryUpdateModel,
)
from packages.billing.models.domain.subscription_plan import (
    SubscriptionPlan,
    SubscriptionPlanCreateModel,
)

__all__ = [
    # Enums
    "UserSubscriptionStatus",
    "BillingType",
    "BillingInterval",
    "CreemEventType",
    "PaymentStatus",
    # Credit usage
    "CreditUsage",
    "CreditUsageCreateModel",
    "CreditUsageUpdateModel",
    # Subscription
    "UserSubscription",
    "UserSubscriptionCreateModel",
    "UserSubscriptionUpdateModel",
    # Payment history
    "PaymentHistory",
    "PaymentHistoryCreateModel",
    "PaymentHistoryUpdateModel",
    # Plans
    "SubscriptionPlan",
    "SubscriptionPlanCreateModel",
]
