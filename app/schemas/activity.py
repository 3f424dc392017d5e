# backend-server/app/schemas/activity.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.enums import ActivityAction, Role, TargetType
from app.schemas.common import Pagination

class Actor(BaseModel):
    id: int
    name: str
    email: str
    role: Role

    class Config:
        from_attributes = True

class ActivityLogEntry(BaseModel):
    id: int
    actor_id: int
    actor: Optional[Actor] = None
    action: ActivityAction
    target_type: TargetType
    target_id: int
    changes: Dict[str, Any] = {}
    description: str
    metadata: Dict[str, Any] = Field(default_factory=dict, validation_alias="meta")
    created_at: datetime

    class Config:
        from_attributes = True

class ActivityLogList(BaseModel):
    logs: List[ActivityLogEntry]
    pagination: Pagination
