from typing import Generic, TypeVar, Optional, List, Type

from sqlalchemy import select, update
from pydantic import BaseModel

from common.core.otel_axiom_exporter import trace_span
from common.db.scoped import get_session

EntityType = TypeVar("EntityType")
DomainModelType = TypeVar("DomainModelType")
CreateModelType = TypeVar("CreateModelType", bound=BaseModel)
UpdateModelType = TypeVar("UpdateModelType", bound=BaseModel)


class BaseRepository(Generic[EntityType, DomainModelType]):
    """
    Base repository over one entity class.

    Sessions are acquired per operation through get_session(), so a repository
    call inside `async with transaction():` joins that transaction and a call
    outside of one commits on its own.

    Example:
        repo = UserRepository()
        user = await repo.get(123)
    """

    def __init__(
        self,
        entity_class: Type[EntityType],
        domain_class: Type[DomainModelType],
    ):
        self.entity_class = entity_class
        self.domain_class = domain_class

    def _get_session(self):
        return get_session()

    def _exclude_deleted(self, query):
        """Filter soft-deleted rows if the entity has a deleted column."""
        if hasattr(self.entity_class, "deleted"):
            query = query.where(self.entity_class.deleted == False)  # noqa
        return query

    def _entity_to_domain(self, entity: EntityType) -> DomainModelType:
        """Convert database entity to domain model."""
        return self.domain_class.model_validate(entity)

    def _entities_to_domain(self, entities: List[EntityType]) -> List[DomainModelType]:
        """Convert list of database entities to domain models."""
        return [self._entity_to_domain(entity) for entity in entities]

    @trace_span
    async def get(self, id: int) -> Optional[DomainModelType]:
        query = self._exclude_deleted(
            select(self.entity_class).where(self.entity_class.id == id)
        )

        async with self._get_session() as session:
            result = await session.execute(query)
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None

    @trace_span
    async def create(self, create_model: CreateModelType) -> DomainModelType:
        """Create a new entity from a typed create model."""
        data = create_model.model_dump(exclude_none=True)
        db_obj = self.entity_class(**data)
        async with self._get_session() as session:
            session.add(db_obj)
            await session.flush()
            await session.refresh(db_obj)
            return self._entity_to_domain(db_obj)

    @trace_span
    async def update(
        self, id: int, update_model: UpdateModelType
    ) -> Optional[DomainModelType]:
        """Apply the fields explicitly set on the update model."""
        data = update_model.model_dump(exclude_unset=True)
        if not data:
            return await self.get(id)

        async with self._get_session() as session:
            await session.execute(
                update(self.entity_class).where(self.entity_class.id == id).values(data)
            )
            await session.flush()
        return await self.get(id)

