"""
Domain models for payment history.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, field_validator

from packages.billing.models.domain.enums import PaymentStatus
from packages.billing.utils.periods import ensure_utc


class PaymentHistory(BaseModel):
    """Individual payment attempt reported by Creem."""

    id: int
    user_id: str
    subscription_plan_id: Optional[int] = None

    amount: Decimal
    currency: Optional[str] = None
    interval: Optional[str] = None
    status: str

    creem_payment_intent_id: Optional[str] = None
    creem_product_id: Optional[str] = None
    creem_subscription_id: Optional[str] = None
    creem_customer_id: Optional[str] = None

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("created_at")
    @classmethod
    def validate_utc(cls, v):
        return ensure_utc(v)


class PaymentHistoryCreateModel(BaseModel):
    """Model for creating a payment history row."""

    user_id: str
    subscription_plan_id: Optional[int] = None
    amount: Decimal = Decimal("0")
    currency: Optional[str] = None
    interval: Optional[str] = None
    status: str

    creem_payment_intent_id: Optional[str] = None
    creem_product_id: Optional[str] = None
    creem_subscription_id: Optional[str] = None
    creem_customer_id: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        if isinstance(v, PaymentStatus):
            return v.value
        return v


class PaymentHistoryUpdateModel(BaseModel):
    """
    Model for updating a payment history row.

    Only the Creem identifiers and the status change after creation.
    """

    creem_subscription_id: Optional[str] = None
    creem_customer_id: Optional[str] = None
    status: Optional[str] = None

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        if isinstance(v, PaymentStatus):
            return v.value
        return v
