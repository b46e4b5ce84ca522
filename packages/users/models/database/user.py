from sqlalchemy import Column, String, ForeignKey, UniqueConstraint

from common.db.base import Base, BigIntegerType, SoftDeleteMixin, TimestampMixin


class UserEntity(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "users"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    email = Column(String, nullable=False, unique=True, index=True)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    picture = Column(String, nullable=True)

    # Stripe customer ID, created at signup or lazily on first billing visit
    stripe_customer_id = Column(String(255), nullable=True, unique=True, index=True)


class UserCredentialEntity(TimestampMixin, Base):
    """Link between a user and an external identity provider account."""

    __tablename__ = "user_credentials"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(
        BigIntegerType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    provider = Column(String(50), nullable=False)  # e.g. google
    provider_user_id = Column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "provider", "provider_user_id", name="uq_user_credentials_provider_user"
        ),
    )
