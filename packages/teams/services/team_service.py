from packages.teams.repositories.team_repository import TeamRepository
from common.core.otel_axiom_exporter import trace_span


class TeamService:
    """Service for team lookups used by account statistics."""

    def __init__(self, team_repo: TeamRepository = None):
        self.team_repo = team_repo or TeamRepository()

    @trace_span
    async def count(self, user_id: int, own: bool) -> int:
        """Count teams the user owns (own=True) or can access (own=False)."""
        return await self.team_repo.count_for_user(user_id, own)
