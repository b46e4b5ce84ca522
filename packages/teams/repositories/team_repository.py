from sqlalchemy import select, func, or_

from common.repositories.base import BaseRepository
from common.core.otel_axiom_exporter import trace_span
from packages.teams.models.database.team import TeamEntity, TeamMembershipEntity
from packages.teams.models.domain.team import Team


def _owned_or_joined(user_id: int):
    return or_(
        TeamEntity.owner_id == user_id,
        TeamEntity.id.in_(
            select(TeamMembershipEntity.team_id).where(
                TeamMembershipEntity.user_id == user_id
            )
        ),
    )


def accessible_team_ids(user_id: int):
    """Select of ids of teams the user owns or is a member of."""
    return (
        select(TeamEntity.id)
        .where(TeamEntity.deleted == False, _owned_or_joined(user_id))  # noqa
        .correlate(None)
    )


class TeamRepository(BaseRepository[TeamEntity, Team]):
    def __init__(self):
        super().__init__(TeamEntity, Team)

    @trace_span
    async def count_for_user(self, user_id: int, own: bool) -> int:
        """Count teams owned by the user, or all teams the user belongs to."""
        condition = (
            TeamEntity.owner_id == user_id if own else _owned_or_joined(user_id)
        )
        query = self._exclude_deleted(
            select(func.count()).select_from(TeamEntity).where(condition)
        )
        async with self._get_session() as session:
            result = await session.execute(query)
            return result.scalar_one()
