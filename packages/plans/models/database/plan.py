"""
Database entities for subscription plans.
"""

from sqlalchemy import Column, String, Integer, Boolean, ForeignKey

from common.db.base import Base, BigIntegerType, TimestampMixin


class PlanConfigEntity(TimestampMixin, Base):
    """
    Named plan tier and its resource limits.

    Shared by every user assigned to the tier; rows are seeded, not edited
    through the API.
    """

    __tablename__ = "plan_configs"

    id = Column(String(50), primary_key=True)  # e.g. basic, pro
    stripe_product_id = Column(String(255), nullable=True, unique=True)

    max_query_count = Column(Integer, nullable=False, default=0)
    max_team_count = Column(Integer, nullable=False, default=0)
    max_team_member_count = Column(Integer, nullable=False, default=0)
    allow_more_team_members = Column(
        Boolean, nullable=False, default=False, server_default="false"
    )


class UserPlanEntity(TimestampMixin, Base):
    """
    Assignment of a user to a plan config.

    One row per user at most. `quantity` is the purchased seat count.
    """

    __tablename__ = "user_plans"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(
        BigIntegerType,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    plan_config_id = Column(
        String(50), ForeignKey("plan_configs.id"), nullable=False, index=True
    )
    quantity = Column(Integer, nullable=False, default=1, server_default="1")
