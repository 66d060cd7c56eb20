"""
Domain models for credit usage.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, field_validator

from packages.billing.utils.periods import ensure_utc


class CreditUsage(BaseModel):
    """
    Credit allotment for one user over one period.

    ``credit_total`` grows with one-time top-ups and is reset on each
    subscription renewal together with ``credit_used``.
    """

    id: int
    user_id: str

    credit_used: int
    credit_total: int

    period_start: datetime
    period_end: datetime

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("period_start", "period_end", "created_at", "updated_at")
    @classmethod
    def validate_utc(cls, v):
        return ensure_utc(v)


class CreditUsageCreateModel(BaseModel):
    """Model for creating a credit usage record."""

    user_id: str
    credit_used: int = 0
    credit_total: int
    period_start: datetime
    period_end: datetime


class CreditUsageUpdateModel(BaseModel):
    """Model for updating a credit usage record."""

    credit_used: Optional[int] = None
    credit_total: Optional[int] = None
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None
