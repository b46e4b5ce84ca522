"""
User account API routes.

Billing portal access, effective plan limits and usage statistics for the
authenticated user.
"""

import asyncio
from typing import Optional

from fastapi import APIRouter, Depends, Header

from packages.auth.dependencies import get_current_active_user
from packages.auth.models.domain import AuthenticatedUser
from packages.queries.services.query_service import QueryService
from packages.query_collections.services.collection_service import (
    QueryCollectionService,
)
from packages.teams.services.team_service import TeamService
from packages.users.dependencies import (
    get_collection_service,
    get_query_service,
    get_team_service,
    get_user_service,
)
from packages.users.models.schemas.user import (
    BillingUrlResponse,
    OwnAccessCount,
    PlanResponse,
    UserStatsResponse,
)
from packages.users.services.user_service import UserService

router = APIRouter()


@router.get("/billing", response_model=BillingUrlResponse)
async def get_billing_url(
    referer: Optional[str] = Header(default=None),
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
):
    """
    Get a Stripe billing portal URL for the current user.

    The referring page is used as the portal's return URL.
    """
    url = await user_service.get_billing_url(current_user.user_id, referer)
    return BillingUrlResponse(url=url)


@router.get("/plan", response_model=PlanResponse)
async def get_current_plan(
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    user_service: UserService = Depends(get_user_service),
):
    """Get the plan limits that apply to the current user."""
    cfg = await user_service.get_plan_config(current_user.user_id)
    if not cfg:
        return PlanResponse()

    return PlanResponse(
        max_query_count=cfg.max_query_count,
        max_team_count=cfg.max_team_count,
        max_team_member_count=cfg.max_team_member_count,
    )


@router.get("/stats", response_model=UserStatsResponse)
async def get_stats(
    current_user: AuthenticatedUser = Depends(get_current_active_user),
    query_service: QueryService = Depends(get_query_service),
    collection_service: QueryCollectionService = Depends(get_collection_service),
    team_service: TeamService = Depends(get_team_service),
):
    """Count queries, collections and teams the user owns and can access."""
    user_id = current_user.user_id

    # Independent reads, run in parallel
    (
        queries_own,
        queries_access,
        collections_own,
        collections_access,
        teams_own,
        teams_access,
    ) = await asyncio.gather(
        query_service.count(user_id, True),
        query_service.count(user_id, False),
        collection_service.count(user_id, True),
        collection_service.count(user_id, False),
        team_service.count(user_id, True),
        team_service.count(user_id, False),
    )

    return UserStatsResponse(
        queries=OwnAccessCount(own=queries_own, access=queries_access),
        collections=OwnAccessCount(own=collections_own, access=collections_access),
        teams=OwnAccessCount(own=teams_own, access=teams_access),
    )
