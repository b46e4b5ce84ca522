"""
Repositories for plan configs and user plan assignments.
"""

from typing import Optional
from sqlalchemy import select, update

from common.repositories.base import BaseRepository
from common.core.otel_axiom_exporter import trace_span
from packages.plans.models.database.plan import PlanConfigEntity, UserPlanEntity
from packages.plans.models.domain.plan import (
    PlanConfig,
    UserPlan,
    UserPlanWithConfig,
)


class PlanConfigRepository(BaseRepository[PlanConfigEntity, PlanConfig]):
    """Read access to plan tiers."""

    def __init__(self):
        super().__init__(PlanConfigEntity, PlanConfig)

    @trace_span
    async def get_config(self, plan_config_id: str) -> Optional[PlanConfig]:
        async with self._get_session() as session:
            entity = await session.get(PlanConfigEntity, plan_config_id)
            return self._entity_to_domain(entity) if entity else None


class UserPlanRepository(BaseRepository[UserPlanEntity, UserPlan]):
    """Repository for per-user plan assignments."""

    def __init__(self):
        super().__init__(UserPlanEntity, UserPlan)

    @trace_span
    async def get_by_user_id(self, user_id: int) -> Optional[UserPlan]:
        async with self._get_session() as session:
            result = await session.execute(
                select(UserPlanEntity).where(UserPlanEntity.user_id == user_id)
            )
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None

    @trace_span
    async def get_with_plan_config(self, user_id: int) -> Optional[UserPlanWithConfig]:
        """Get the user's plan assignment joined with its plan config."""
        async with self._get_session() as session:
            result = await session.execute(
                select(UserPlanEntity, PlanConfigEntity)
                .join(
                    PlanConfigEntity,
                    PlanConfigEntity.id == UserPlanEntity.plan_config_id,
                )
                .where(UserPlanEntity.user_id == user_id)
            )
            row = result.first()
            if not row:
                return None

            user_plan, plan_config = row
            return UserPlanWithConfig(
                **self._entity_to_domain(user_plan).model_dump(),
                plan_config=PlanConfig.model_validate(plan_config),
            )

    @trace_span
    async def update_quantity(self, user_id: int, quantity: int) -> Optional[UserPlan]:
        """Set the purchased quantity. Returns None if the user has no plan."""
        async with self._get_session() as session:
            result = await session.execute(
                update(UserPlanEntity)
                .where(UserPlanEntity.user_id == user_id)
                .values(quantity=quantity)
            )
            await session.flush()
            if result.rowcount == 0:
                return None
        return await self.get_by_user_id(user_id)
