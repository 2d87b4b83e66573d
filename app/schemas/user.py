# app/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from app.models.user import Role


class User(BaseModel):
    id: int
    intra_id: str
    name: str
    role: Role
    grade: str
    is_available: bool
    profile_img_url: str = ""
    last_login_at: Optional[datetime] = None
    # Penalty state, as consumed by the reservation admission check
    no_show_count: int = 0
    last_no_show_at: Optional[datetime] = None
    late_count: int = 0
    ban_status: str = "none"
    is_reservation_banned: bool = False
    ban_until: Optional[datetime] = None
    created_at: datetime
    model_config = {"from_attributes": True}


class UserWithReservationCount(User):
    reservation_count: int = 0


class RoleUpdate(BaseModel):
    role: Role
