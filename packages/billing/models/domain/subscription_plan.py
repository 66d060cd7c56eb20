"""
Domain models for subscription plans.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel


class SubscriptionPlan(BaseModel):
    """Plan offered for sale through a Creem product."""

    id: int
    name: str
    description: Optional[str] = None

    price: Decimal
    currency: str
    interval: str
    credit: int

    creem_product_id: Optional[str] = None
    is_active: bool = True

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubscriptionPlanCreateModel(BaseModel):
    """Model for creating a plan."""

    name: str
    description: Optional[str] = None
    price: Decimal = Decimal("0")
    currency: str = "USD"
    interval: str
    credit: int = 0
    creem_product_id: Optional[str] = None
    is_active: bool = True
