"""
Database entity for user subscriptions.
"""

from sqlalchemy import Column, String, DateTime, Index

from common.db.base import Base, BigIntegerType, TimestampMixin


class UserSubscriptionEntity(Base, TimestampMixin):
    """
    User subscription database entity.

    Stores the plan, lifecycle status, billing cycle and Creem identifiers.
    """

    __tablename__ = "user_subscriptions"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(String(255), nullable=False, index=True)
    subscription_plan_id = Column(BigIntegerType, nullable=False)

    status = Column(String(50), nullable=False, index=True)  # active, cancelled, expired

    # Billing cycle
    current_period_start = Column(DateTime(timezone=True), nullable=False)
    current_period_end = Column(DateTime(timezone=True), nullable=False)

    # External platform IDs
    creem_subscription_id = Column(String(255), nullable=True, index=True)
    creem_customer_id = Column(String(255), nullable=True)

    __table_args__ = (
        Index("idx_user_subscription_user_status", "user_id", "status"),
        Index("idx_user_subscription_period_end", "current_period_end"),
    )
