"""
Database entity for subscription plans.
"""

from sqlalchemy import Column, String, Integer, Numeric, Boolean, Text, true

from common.db.base import Base, BigIntegerType, TimestampMixin


class SubscriptionPlanEntity(Base, TimestampMixin):
    """Sellable plan, linked to a Creem product."""

    __tablename__ = "subscription_plans"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Pricing
    price = Column(Numeric(12, 2), nullable=False, server_default="0")
    currency = Column(String(10), nullable=False, server_default="USD")
    interval = Column(String(20), nullable=False)  # month, year, one-time
    credit = Column(Integer, nullable=False, server_default="0")

    creem_product_id = Column(String(255), nullable=True, unique=True, index=True)
    is_active = Column(Boolean, nullable=False, server_default=true())
