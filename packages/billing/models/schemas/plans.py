"""API schemas for plan lookups."""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel

from packages.billing.models.domain.subscription_plan import SubscriptionPlan
from packages.billing.utils.formatting import billing_period_display, format_money


class PlanResponse(BaseModel):
    """Plan as shown on pricing pages."""

    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    currency: str
    price_formatted: str
    billing_period: str
    credit: int
    creem_product_id: Optional[str] = None
    is_active: bool

    @classmethod
    def from_plan(cls, plan: SubscriptionPlan) -> "PlanResponse":
        return cls(
            id=plan.id,
            name=plan.name,
            description=plan.description,
            price=plan.price,
            currency=plan.currency,
            price_formatted=format_money(plan.price, plan.currency),
            billing_period=billing_period_display(plan.interval),
            credit=plan.credit,
            creem_product_id=plan.creem_product_id,
            is_active=plan.is_active,
        )
