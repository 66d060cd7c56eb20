"""
Repository for user subscriptions.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from packages.billing.models.database.user_subscription import UserSubscriptionEntity
from packages.billing.models.domain.user_subscription import (
    UserSubscription,
    UserSubscriptionUpdateModel,
)
from common.core.otel_axiom_exporter import trace_span


class UserSubscriptionRepository(
    BaseRepository[UserSubscriptionEntity, UserSubscription]
):
    """Repository for managing user subscriptions."""

    def __init__(self, db_session: AsyncSession):
        super().__init__(UserSubscriptionEntity, UserSubscription, db_session)

    @trace_span
    async def get_by_user_id(self, user_id: str) -> list[UserSubscription]:
        """Get all subscription records for a user, newest first."""
        result = await self.db_session.execute(
            self._select()
            .where(UserSubscriptionEntity.user_id == user_id)
            .order_by(UserSubscriptionEntity.id.desc())
        )
        db_subscriptions = result.scalars().all()
        return self._entities_to_domain(db_subscriptions)

    @trace_span
    async def get_by_creem_subscription_id(
        self, creem_subscription_id: str
    ) -> list[UserSubscription]:
        """Get subscription records carrying a Creem subscription id."""
        result = await self.db_session.execute(
            self._select().where(
                UserSubscriptionEntity.creem_subscription_id == creem_subscription_id
            )
        )
        db_subscriptions = result.scalars().all()
        return self._entities_to_domain(db_subscriptions)

    @trace_span
    async def update_by_user_id(
        self, user_id: str, update_model: UserSubscriptionUpdateModel
    ) -> int:
        """Overwrite every subscription record of a user. Returns rows updated."""
        return await self._update_where(
            update_model, UserSubscriptionEntity.user_id == user_id
        )

    @trace_span
    async def update_by_creem_subscription_id(
        self, creem_subscription_id: str, update_model: UserSubscriptionUpdateModel
    ) -> int:
        """Update the records linked to a Creem subscription. Returns rows updated."""
        return await self._update_where(
            update_model,
            UserSubscriptionEntity.creem_subscription_id == creem_subscription_id,
        )
