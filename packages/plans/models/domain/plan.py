"""Domain models for plan configs and plan assignments."""

from typing import Optional
from pydantic import BaseModel, Field


class PlanConfig(BaseModel):
    """Resource limits of a plan tier."""

    id: str
    stripe_product_id: Optional[str] = None
    max_query_count: int = 0
    max_team_count: int = 0
    max_team_member_count: int = 0
    allow_more_team_members: bool = False

    class Config:
        from_attributes = True


class PlanConfigCreateModel(BaseModel):
    id: str
    stripe_product_id: Optional[str] = None
    max_query_count: int = 0
    max_team_count: int = 0
    max_team_member_count: int = 0
    allow_more_team_members: bool = False


class UserPlan(BaseModel):
    id: int
    user_id: int
    plan_config_id: str
    quantity: int = 1

    class Config:
        from_attributes = True


class UserPlanCreateModel(BaseModel):
    user_id: int
    plan_config_id: str
    quantity: int = Field(default=1, ge=0)


class UserPlanWithConfig(UserPlan):
    """A plan assignment together with the config it points to."""

    plan_config: PlanConfig


def effective_plan_config(user_plan: UserPlanWithConfig) -> PlanConfig:
    """
    Plan config as it applies to the assigned user.

    Purchased seats raise the team member limit; the configured value is a
    floor, never lowered by a smaller quantity.
    """
    config = user_plan.plan_config
    return config.model_copy(
        update={
            "max_team_member_count": max(
                config.max_team_member_count, user_plan.quantity
            )
        }
    )
