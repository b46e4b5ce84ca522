from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Team(BaseModel):
    id: int
    name: str
    owner_id: int
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
