from sqlalchemy import select, func, or_

from common.repositories.base import BaseRepository
from common.core.otel_axiom_exporter import trace_span
from packages.query_collections.models.database.collection import (
    QueryCollectionEntity,
)
from packages.query_collections.models.domain.collection import QueryCollection
from packages.workspaces.repositories.workspace_repository import (
    accessible_workspace_ids,
)


def _owned_or_shared(user_id: int):
    return or_(
        QueryCollectionEntity.owner_id == user_id,
        QueryCollectionEntity.workspace_id.in_(accessible_workspace_ids(user_id)),
    )


def accessible_collection_ids(user_id: int):
    """Select of ids of collections the user owns or reaches through a workspace."""
    return (
        select(QueryCollectionEntity.id)
        .where(QueryCollectionEntity.deleted == False, _owned_or_shared(user_id))  # noqa
        .correlate(None)
    )


class QueryCollectionRepository(BaseRepository[QueryCollectionEntity, QueryCollection]):
    def __init__(self):
        super().__init__(QueryCollectionEntity, QueryCollection)

    @trace_span
    async def count_for_user(self, user_id: int, own: bool) -> int:
        condition = (
            QueryCollectionEntity.owner_id == user_id
            if own
            else _owned_or_shared(user_id)
        )
        query = self._exclude_deleted(
            select(func.count()).select_from(QueryCollectionEntity).where(condition)
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            return result.scalar_one()
