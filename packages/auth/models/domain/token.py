from typing import Optional
from pydantic import BaseModel


class TokenClaims(BaseModel):
    """Claims of an access token issued by the auth service."""

    sub: str  # Subject (user ID)
    exp: int  # Expiration time
    iat: Optional[int] = None  # Issued at time
