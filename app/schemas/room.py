# app/schemas/room.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Room(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[int] = None
    equipment: Optional[str] = None
    is_available: bool
    is_confirm: bool
    created_at: datetime
    updated_at: datetime
    model_config = {"from_attributes": True}


class RoomCreate(BaseModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Cluster Room A"})
    location: str
    capacity: int = Field(..., ge=1)
    description: Optional[str] = None
    equipment: Optional[str] = None
    is_available: bool = True
    is_confirm: bool = True


class RoomUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=1)
    description: Optional[str] = None
    equipment: Optional[str] = None
    is_available: Optional[bool] = None
    is_confirm: Optional[bool] = None
