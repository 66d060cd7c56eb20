"""
Repository for subscription plans.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from packages.billing.models.database.subscription_plan import SubscriptionPlanEntity
from packages.billing.models.domain.subscription_plan import SubscriptionPlan
from common.core.otel_axiom_exporter import trace_span


class SubscriptionPlanRepository(
    BaseRepository[SubscriptionPlanEntity, SubscriptionPlan]
):
    """Read access to plans; plans are seeded by migrations or admins."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(SubscriptionPlanEntity, SubscriptionPlan, db_session)

    @trace_span
    async def get_by_creem_product_id(
        self, creem_product_id: str
    ) -> Optional[SubscriptionPlan]:
        """Get the plan sold through a Creem product."""
        result = await self.db_session.execute(
            self._select().where(
                SubscriptionPlanEntity.creem_product_id == creem_product_id
            )
        )
        db_plan = result.scalar_one_or_none()
        return self._entity_to_domain(db_plan) if db_plan else None
