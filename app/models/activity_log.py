# app/models/activity_log.py
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON

from app.db.base_class import Base
from app.utils.clock import utcnow


class ActivityType(str, enum.Enum):
    ROOM_CREATED = "room_created"
    ROOM_UPDATED = "room_updated"
    ROOM_DELETED = "room_deleted"
    RESERVATION_CREATED = "reservation_created"
    RESERVATION_CANCELLED = "reservation_cancelled"
    RESERVATION_APPROVED = "reservation_approved"
    RESERVATION_REJECTED = "reservation_rejected"
    USER_PENALISED = "user_penalised"
    USER_BAN_LIFTED = "user_ban_lifted"
    CLUB_CREATED = "club_created"
    CLUB_UPDATED = "club_updated"
    CLUB_DELETED = "club_deleted"
    CLUB_APPROVED = "club_approved"
    CLUB_REJECTED = "club_rejected"


class ActivityLog(Base):
    """
    Admin-facing activity feed.

    Levels: info, success, warning, error
    """
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(50), nullable=False, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    event_data = Column(JSON, nullable=True)
    level = Column(String(20), nullable=False, default="info", server_default="info")
    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
