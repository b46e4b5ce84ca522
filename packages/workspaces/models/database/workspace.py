from sqlalchemy import Column, String, ForeignKey

from common.db.base import Base, BigIntegerType, SoftDeleteMixin, TimestampMixin


class WorkspaceEntity(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "workspaces"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    name = Column(String, index=True, nullable=False)
    owner_id = Column(
        BigIntegerType, ForeignKey("users.id"), nullable=False, index=True
    )
    # Set when the workspace is shared with a team
    team_id = Column(BigIntegerType, ForeignKey("teams.id"), nullable=True, index=True)
