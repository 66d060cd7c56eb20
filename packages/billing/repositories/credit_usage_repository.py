"""
Repository for credit usage.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from packages.billing.models.database.credit_usage import CreditUsageEntity
from packages.billing.models.domain.credit_usage import (
    CreditUsage,
    CreditUsageUpdateModel,
)
from common.core.otel_axiom_exporter import trace_span


class CreditUsageRepository(BaseRepository[CreditUsageEntity, CreditUsage]):
    """Repository for per-user credit balances."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(CreditUsageEntity, CreditUsage, db_session)

    @trace_span
    async def get_by_user_id(self, user_id: str) -> Optional[CreditUsage]:
        """Get the credit record for a user, if one exists."""
        result = await self.db_session.execute(
            self._select().where(CreditUsageEntity.user_id == user_id)
        )
        db_usage = result.scalar_one_or_none()
        return self._entity_to_domain(db_usage) if db_usage else None

    @trace_span
    async def update_by_user_id(
        self, user_id: str, update_model: CreditUsageUpdateModel
    ) -> Optional[CreditUsage]:
        """Overwrite the fields set on ``update_model`` for the user's record."""
        await self._update_where(update_model, CreditUsageEntity.user_id == user_id)
        return await self.get_by_user_id(user_id)
