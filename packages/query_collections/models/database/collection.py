from sqlalchemy import Column, String, ForeignKey

from common.db.base import Base, BigIntegerType, SoftDeleteMixin, TimestampMixin


class QueryCollectionEntity(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "query_collections"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    owner_id = Column(
        BigIntegerType, ForeignKey("users.id"), nullable=False, index=True
    )
    workspace_id = Column(
        BigIntegerType, ForeignKey("workspaces.id"), nullable=False, index=True
    )
