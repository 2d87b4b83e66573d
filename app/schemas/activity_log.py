# app/schemas/activity_log.py
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel


class ActivityLog(BaseModel):
    id: int
    type: str
    title: str
    description: Optional[str] = None
    user_id: Optional[int] = None
    event_data: Optional[dict[str, Any]] = None
    level: str
    created_at: datetime
    model_config = {"from_attributes": True}
