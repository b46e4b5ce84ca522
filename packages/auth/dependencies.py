from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status, Header

from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.auth.models.domain import AuthenticatedUser
from packages.auth.services.token_service import TokenService
from packages.users.dependencies import get_user_service
from packages.users.services.user_service import UserService

logger = get_logger(__name__)


def get_token_service() -> TokenService:
    """Get TokenService instance."""
    return TokenService()


@trace_span
async def get_current_user(
    authorization: Annotated[Optional[str], Header()] = None,
    token_service: TokenService = Depends(get_token_service),
    user_service: UserService = Depends(get_user_service),
) -> AuthenticatedUser:
    """Get current authenticated user from a bearer token."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authorization header missing or invalid",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization.split(" ", 1)[1]
    user_id = token_service.get_user_id(token)

    user = await user_service.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthenticatedUser(user_id=user.id, email=user.email)


@trace_span
async def get_current_active_user(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> AuthenticatedUser:
    """Get current active user."""
    logger.info(f"Authenticated user_id={current_user.user_id}")
    return current_user
