from packages.auth.models.domain.authenticated_user import AuthenticatedUser
from packages.auth.models.domain.token import TokenClaims

__all__ = [
    "AuthenticatedUser",
    "TokenClaims",
]
