from typing import Optional
from sqlalchemy import select

from common.repositories.base import BaseRepository
from packages.users.models.database.user import UserEntity, UserCredentialEntity
from packages.users.models.domain.user import User, UserCredential
from common.core.otel_axiom_exporter import trace_span


class UserRepository(BaseRepository[UserEntity, User]):
    def __init__(self):
        super().__init__(UserEntity, User)

    @trace_span
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email."""
        async with self._get_session() as session:
            result = await session.execute(
                select(UserEntity).where(
                    UserEntity.email == email, UserEntity.deleted == False  # noqa
                )
            )
            db_user = result.scalar_one_or_none()
            return self._entity_to_domain(db_user) if db_user else None

    @trace_span
    async def get_by_stripe_customer_id(self, stripe_customer_id: str) -> Optional[User]:
        """Reverse lookup from a Stripe customer to the user it belongs to."""
        async with self._get_session() as session:
            result = await session.execute(
                select(UserEntity)
                .where(
                    UserEntity.stripe_customer_id == stripe_customer_id,
                    UserEntity.deleted == False,  # noqa
                )
                .limit(1)
            )
            db_user = result.scalar_one_or_none()
            return self._entity_to_domain(db_user) if db_user else None


class UserCredentialRepository(BaseRepository[UserCredentialEntity, UserCredential]):
    def __init__(self):
        super().__init__(UserCredentialEntity, UserCredential)

    @trace_span
    async def get_by_provider(
        self, provider: str, provider_user_id: str
    ) -> Optional[UserCredential]:
        async with self._get_session() as session:
            result = await session.execute(
                select(UserCredentialEntity).where(
                    UserCredentialEntity.provider == provider,
                    UserCredentialEntity.provider_user_id == provider_user_id,
                )
            )
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None
