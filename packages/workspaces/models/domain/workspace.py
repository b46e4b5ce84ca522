from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Workspace(BaseModel):
    id: int
    name: str
    owner_id: int
    team_id: Optional[int] = None
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class WorkspaceCreateModel(BaseModel):
    """Model for creating a new workspace."""

    name: str
    owner_id: int
    team_id: Optional[int] = None
