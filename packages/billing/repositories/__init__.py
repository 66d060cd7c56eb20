"""Billing repositories."""

from packages.billing.repositories.credit_usage_repository import CreditUsageRepository
from packages.billing.repositories.payment_history_repository import (
    PaymentHistoryRepository,
)
from packages.billing.repositories.subscription_plan_repository import (
    SubscriptionPlanRepository,
)
from packages.billing.repositories.user_subscription_repository import (
    UserSubscriptionRepository,
)

__all__ = [
    "CreditUsageRepository",
    "PaymentHistoryRepository",
    "SubscriptionPlanRepository",
    "UserSubscriptionRepository",
]
