from sqlalchemy import select, func, or_

from common.repositories.base import BaseRepository
from common.core.otel_axiom_exporter import trace_span
from packages.queries.models.database.query import QueryItemEntity
from packages.queries.models.domain.query import QueryItem
from packages.query_collections.repositories.collection_repository import (
    accessible_collection_ids,
)


class QueryRepository(BaseRepository[QueryItemEntity, QueryItem]):
    def __init__(self):
        super().__init__(QueryItemEntity, QueryItem)

    @trace_span
    async def count_for_user(self, user_id: int, own: bool) -> int:
        """Count queries owned by the user, or reachable through its collections."""
        if own:
            condition = QueryItemEntity.owner_id == user_id
        else:
            condition = or_(
                QueryItemEntity.owner_id == user_id,
                QueryItemEntity.collection_id.in_(accessible_collection_ids(user_id)),
            )

        query = self._exclude_deleted(
            select(func.count()).select_from(QueryItemEntity).where(condition)
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            return result.scalar_one()
