from packages.queries.repositories.query_repository import QueryRepository
from common.core.otel_axiom_exporter import trace_span


class QueryService:
    """Service for saved query lookups."""

    def __init__(self, query_repo: QueryRepository = None):
        self.query_repo = query_repo or QueryRepository()

    @trace_span
    async def count(self, user_id: int, own: bool) -> int:
        """Count queries the user owns (own=True) or can access (own=False)."""
        return await self.query_repo.count_for_user(user_id, own)
