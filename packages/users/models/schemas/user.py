from pydantic import BaseModel, Field


class BillingUrlResponse(BaseModel):
    """Hosted billing session for the current user."""

    url: str = Field(..., description="Stripe billing portal URL")


class PlanResponse(BaseModel):
    """Effective plan limits for the current user."""

    max_query_count: int = 0
    max_team_count: int = 0
    max_team_member_count: int = 0


class OwnAccessCount(BaseModel):
    own: int = Field(..., description="Resources owned by the user")
    access: int = Field(..., description="Resources the user can access")


class UserStatsResponse(BaseModel):
    queries: OwnAccessCount
    collections: OwnAccessCount
    teams: OwnAccessCount
