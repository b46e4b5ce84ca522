from typing import Optional

import jwt
from fastapi import HTTPException, status
from pydantic import ValidationError

from common.core.config import settings
from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.auth.models.domain.token import TokenClaims

logger = get_logger(__name__)


class TokenService:
    """Verifies bearer tokens issued by the auth service."""

    def __init__(self, secret: Optional[str] = None, algorithm: Optional[str] = None):
        self.secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm

    def _unauthorized(self, detail: str) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

    @trace_span
    def verify(self, token: str) -> TokenClaims:
        """Decode and validate a token. Raises 401 when it cannot be trusted."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
            return TokenClaims.model_validate(payload)
        except jwt.ExpiredSignatureError:
            raise self._unauthorized("Token has expired")
        except (jwt.InvalidTokenError, ValidationError) as e:
            logger.info(f"Rejected bearer token: {e}")
            raise self._unauthorized("Invalid token")

    def get_user_id(self, token: str) -> int:
        claims = self.verify(token)
        try:
            return int(claims.sub)
        except ValueError:
            raise self._unauthorized("Invalid token subject")
