"""Database models for billing."""

from packages.billing.models.database.credit_usage import CreditUsageEntity
from packages.billing.models.database.payment_history import PaymentHistoryEntity
from packages.billing.models.database.subscription_plan import SubscriptionPlanEntity
from packages.billing.models.database.user_subscription import UserSubscriptionEntity

__all__ = [
    "CreditUsageEntity",
    "PaymentHistoryEntity",
    "SubscriptionPlanEntity",
    "UserSubscriptionEntity",
]
