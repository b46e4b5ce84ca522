from sqlalchemy import Column, String, ForeignKey, UniqueConstraint

from common.db.base import Base, BigIntegerType, SoftDeleteMixin, TimestampMixin


class TeamEntity(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "teams"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    owner_id = Column(
        BigIntegerType, ForeignKey("users.id"), nullable=False, index=True
    )


class TeamMembershipEntity(TimestampMixin, Base):
    __tablename__ = "team_memberships"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    team_id = Column(
        BigIntegerType,
        ForeignKey("teams.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        BigIntegerType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role = Column(String(50), nullable=False, default="member")

    __table_args__ = (
        UniqueConstraint("team_id", "user_id", name="uq_team_memberships_team_user"),
    )
