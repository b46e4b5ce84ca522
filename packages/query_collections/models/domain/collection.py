from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class QueryCollection(BaseModel):
    id: int
    name: str
    owner_id: int
    workspace_id: int
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
