"""
Domain models for user subscriptions.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_validator

from packages.billing.models.domain.enums import UserSubscriptionStatus
from packages.billing.utils.periods import ensure_utc


class UserSubscription(BaseModel):
    """
    A user's subscription to a plan.

    Represents:
    - Plan and lifecycle status (Active/Cancelled/Expired)
    - Billing cycle dates
    - Creem subscription and customer IDs
    """

    id: int
    user_id: str
    subscription_plan_id: int

    status: UserSubscriptionStatus

    current_period_start: datetime
    current_period_end: datetime

    creem_subscription_id: Optional[str] = None
    creem_customer_id: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator(
        "current_period_start", "current_period_end", "created_at", "updated_at"
    )
    @classmethod
    def validate_utc(cls, v):
        return ensure_utc(v)


class UserSubscriptionCreateModel(BaseModel):
    """Model for creating a new subscription."""

    user_id: str
    subscription_plan_id: int
    status: str = UserSubscriptionStatus.ACTIVE.value
    current_period_start: datetime
    current_period_end: datetime

    creem_subscription_id: Optional[str] = None
    creem_customer_id: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        if isinstance(v, UserSubscriptionStatus):
            return v.value
        return v


class UserSubscriptionUpdateModel(BaseModel):
    """Model for updating a subscription. Only fields that are set are written."""

    subscription_plan_id: Optional[int] = None
    status: Optional[str] = None

    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None

    creem_subscription_id: Optional[str] = None
    creem_customer_id: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        if isinstance(v, UserSubscriptionStatus):
            return v.value
        return v
