from typing import List
from sqlalchemy import select, or_
from packages.workspaces.models.database.workspace import WorkspaceEntity
from packages.workspaces.models.domain.workspace import Workspace
from packages.teams.repositories.team_repository import accessible_team_ids
from common.repositories.base import BaseRepository
from common.core.otel_axiom_exporter import trace_span


def accessible_workspace_ids(user_id: int):
    """Select of ids of workspaces the user owns or reaches through a team."""
    return (
        select(WorkspaceEntity.id)
        .where(
            WorkspaceEntity.deleted == False,  # noqa
            or_(
                WorkspaceEntity.owner_id == user_id,
                WorkspaceEntity.team_id.in_(accessible_team_ids(user_id)),
            ),
        )
        .correlate(None)
    )


class WorkspaceRepository(BaseRepository[WorkspaceEntity, Workspace]):
    def __init__(self):
        super().__init__(WorkspaceEntity, Workspace)

    @trace_span
    async def get_by_owner(self, owner_id: int) -> List[Workspace]:
        """Get the workspaces a user owns."""
        async with self._get_session() as session:
            query = self._exclude_deleted(
                select(self.entity_class).where(self.entity_class.owner_id == owner_id)
            ).order_by(self.entity_class.id)
            result = await session.execute(query)
            return self._entities_to_domain(result.scalars().all())
