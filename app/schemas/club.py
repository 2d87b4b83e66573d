# app/schemas/club.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.club import ClubMemberRole, ClubMemberStatus, ClubStatus


class ClubUserSummary(BaseModel):
    id: int
    intra_id: str
    name: str
    model_config = {"from_attributes": True}


class ClubMember(BaseModel):
    id: int
    club_id: int
    user_id: int
    role: ClubMemberRole
    status: ClubMemberStatus
    created_at: datetime
    updated_at: datetime
    user: Optional[ClubUserSummary] = None
    model_config = {"from_attributes": True}


class Club(BaseModel):
    id: int
    name: str
    leader_id: int
    description: Optional[str] = None
    count_member: int
    status: ClubStatus
    created_at: datetime
    updated_at: datetime
    leader: Optional[ClubUserSummary] = None
    model_config = {"from_attributes": True}


class ClubDetail(Club):
    members: List[ClubMember] = []


class ClubCreate(BaseModel):
    name: str = Field(..., min_length=1, json_schema_extra={"example": "Algorithm Study"})
    # Defaults to the requesting user
    leader_id: Optional[int] = None
    description: Optional[str] = None


class ClubUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    leader_id: Optional[int] = None
    description: Optional[str] = None


class ClubJoin(BaseModel):
    club_id: int


class ClubMemberStatusUpdate(BaseModel):
    status: ClubMemberStatus


class ClubMemberRoleUpdate(BaseModel):
    role: ClubMemberRole
