"""
Database entity for credit usage.
"""

from sqlalchemy import Column, String, DateTime, Integer, Index

from common.db.base import Base, BigIntegerType, TimestampMixin


class CreditUsageEntity(Base, TimestampMixin):
    """
    Per-user credit allotment for the current period.

    One row per user. Created on the user's first payment event and
    mutated only by the Creem webhook.
    """

    __tablename__ = "credit_usage"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(String(255), nullable=False, unique=True, index=True)

    credit_used = Column(Integer, nullable=False, server_default="0")
    credit_total = Column(Integer, nullable=False, server_default="0")

    period_start = Column(DateTime(timezone=True), nullable=False)
    period_end = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("idx_credit_usage_period_end", "period_end"),)
