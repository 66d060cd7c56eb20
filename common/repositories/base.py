from typing import Generic, TypeVar, Optional, List, Type

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from pydantic import BaseModel

from common.core.otel_axiom_exporter import trace_span

EntityType = TypeVar("EntityType")
DomainModelType = TypeVar("DomainModelType")
CreateModelType = TypeVar("CreateModelType", bound=BaseModel)
UpdateModelType = TypeVar("UpdateModelType", bound=BaseModel)


class BaseRepository(Generic[EntityType, DomainModelType]):
    """
    Base repository bound to one session.

    The caller owns the session lifecycle, normally through
    ``Database.transaction()``, so every repository built from the same
    session takes part in the same transaction.

    Example:
        async with database.transaction() as session:
            repo = CreditUsageRepository(session)
            usage = await repo.get_by_user_id("user_123")
    """

    def __init__(
        self,
        entity_class: Type[EntityType],
        domain_class: Type[DomainModelType],
        db_session: AsyncSession,
    ):
        self.entity_class = entity_class
        self.domain_class = domain_class
        self.db_session = db_session

    def _entity_to_domain(self, entity: EntityType) -> DomainModelType:
        """Convert database entity to domain model."""
        return self.domain_class.model_validate(entity)

    def _entities_to_domain(self, entities: List[EntityType]) -> List[DomainModelType]:
        """Convert list of database entities to domain models."""
        return [self._entity_to_domain(entity) for entity in entities]

    def _select(self):
        """SELECT for this entity that refreshes rows already in the session."""
        return select(self.entity_class).execution_options(populate_existing=True)

    @trace_span
    async def get(self, id: int) -> Optional[DomainModelType]:
        result = await self.db_session.execute(
            self._select().where(self.entity_class.id == id)
        )
        entity = result.scalar_one_or_none()
        return self._entity_to_domain(entity) if entity else None

    @trace_span
    async def create(self, create_model: CreateModelType) -> DomainModelType:
        """Create a new entity from a typed create model."""
        data = create_model.model_dump(exclude_none=True)
        db_obj = self.entity_class(**data)
        self.db_session.add(db_obj)
        await self.db_session.flush()
        await self.db_session.refresh(db_obj)
        return self._entity_to_domain(db_obj)

    @trace_span
    async def update(
        self, id: int, update_model: UpdateModelType
    ) -> Optional[DomainModelType]:
        """Update an entity with a typed update model."""
        await self._update_where(update_model, self.entity_class.id == id)
        return await self.get(id)

    async def _update_where(self, update_model: UpdateModelType, *criteria) -> int:
        """Apply the fields set on ``update_model`` to every row matching ``criteria``."""
        data = update_model.model_dump(exclude_unset=True)
        if not data:
            return 0

        result = await self.db_session.execute(
            update(self.entity_class)
            .where(*criteria)
            .values(data)
            .execution_options(synchronize_session="fetch")
        )
        await self.db_session.flush()
        return result.rowcount
