from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel


class QueryItem(BaseModel):
    id: int
    name: str
    owner_id: int
    collection_id: int
    content: Optional[Dict[str, Any]] = None
    deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
