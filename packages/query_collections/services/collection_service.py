from packages.query_collections.repositories.collection_repository import (
    QueryCollectionRepository,
)
from common.core.otel_axiom_exporter import trace_span


class QueryCollectionService:
    def __init__(self, collection_repo: QueryCollectionRepository = None):
        self.collection_repo = collection_repo or QueryCollectionRepository()

    @trace_span
    async def count(self, user_id: int, own: bool) -> int:
        """Count collections the user owns (own=True) or can access (own=False)."""
        return await self.collection_repo.count_for_user(user_id, own)
