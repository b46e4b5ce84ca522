from sqlalchemy import Column, String, ForeignKey, JSON

from common.db.base import Base, BigIntegerType, SoftDeleteMixin, TimestampMixin


class QueryItemEntity(SoftDeleteMixin, TimestampMixin, Base):
    __tablename__ = "query_items"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    owner_id = Column(
        BigIntegerType, ForeignKey("users.id"), nullable=False, index=True
    )
    collection_id = Column(
        BigIntegerType, ForeignKey("query_collections.id"), nullable=False, index=True
    )
    content = Column(JSON, nullable=True)  # serialized query, variables, headers
