"""
Repository for payment history.
"""

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from packages.billing.models.database.payment_history import PaymentHistoryEntity
from packages.billing.models.domain.payment_history import PaymentHistory
from packages.billing.models.domain.enums import PaymentStatus
from common.core.otel_axiom_exporter import trace_span


class PaymentHistoryRepository(BaseRepository[PaymentHistoryEntity, PaymentHistory]):
    """Repository for payment history rows."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(PaymentHistoryEntity, PaymentHistory, db_session)

    @trace_span
    async def get_by_user_id(self, user_id: str) -> list[PaymentHistory]:
        """Get a user's payments, newest first."""
        result = await self.db_session.execute(
            self._select()
            .where(PaymentHistoryEntity.user_id == user_id)
            .order_by(PaymentHistoryEntity.id.desc())
        )
        return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def has_successful_payment_by_user_id(self, user_id: str) -> bool:
        """Check whether the user has at least one successful payment."""
        successful = [status.value for status in PaymentStatus.successful()]
        result = await self.db_session.execute(
            select(func.count(PaymentHistoryEntity.id)).where(
                PaymentHistoryEntity.user_id == user_id,
                PaymentHistoryEntity.status.in_(successful),
            )
        )
        return (result.scalar_one() or 0) > 0
