"""FastAPI providers for the services behind the /user routes."""

from packages.users.services.user_service import UserService
from packages.queries.services.query_service import QueryService
from packages.query_collections.services.collection_service import (
    QueryCollectionService,
)
from packages.teams.services.team_service import TeamService


def get_user_service() -> UserService:
    """Get UserService instance."""
    return UserService()


def get_query_service() -> QueryService:
    return QueryService()


def get_collection_service() -> QueryCollectionService:
    return QueryCollectionService()


def get_team_service() -> TeamService:
    return TeamService()
