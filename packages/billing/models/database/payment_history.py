"""
Database entity for payment history.
"""

from sqlalchemy import Column, String, Numeric, Index

from common.db.base import Base, BigIntegerType, CreatedAtMixin


class PaymentHistoryEntity(Base, CreatedAtMixin):
    """
    One row per payment attempt reported by Creem.

    One-time checkouts insert a row; subscription rows are only updated
    once their Creem identifiers are known.
    """

    __tablename__ = "payment_history"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(String(255), nullable=False, index=True)
    subscription_plan_id = Column(BigIntegerType, nullable=True)

    amount = Column(Numeric(12, 2), nullable=False, server_default="0")
    currency = Column(String(10), nullable=True)
    interval = Column(String(20), nullable=True)  # month, year
    status = Column(String(50), nullable=False, index=True)  # pending, completed, failed

    # External platform IDs
    creem_payment_intent_id = Column(String(255), nullable=True, index=True)
    creem_product_id = Column(String(255), nullable=True)
    creem_subscription_id = Column(String(255), nullable=True, index=True)
    creem_customer_id = Column(String(255), nullable=True)

    __table_args__ = (Index("idx_payment_history_user_status", "user_id", "status"),)
