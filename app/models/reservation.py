# app/models/reservation.py
import enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    text,
)
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.utils.clock import utcnow


class ReservationStatus(str, enum.Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FINISHED = "finished"
    CANCELLED = "cancelled"


class Reservation(Base):
    """
    A booking of one room by one user for a [start_time, end_time) window.

    Lifecycle: pending -> confirmed -> finished, or confirmed -> cancelled
    when the holder never checks in. Owner cancellation and admin rejection
    delete the row instead of changing its status.
    """
    __tablename__ = "reservation"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("room.id"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    attendees = Column(Integer, nullable=False, default=0, server_default=text("0"))
    team_name = Column(String, nullable=True)

    status = Column(
        String(20),
        nullable=False,
        default=ReservationStatus.CONFIRMED.value,
        server_default=ReservationStatus.CONFIRMED.value,
    )

    # No-show / attendance tracking
    is_no_show = Column(Boolean, nullable=False, default=False, server_default=text("false"))
    no_show_reported_at = Column(DateTime, nullable=True)
    no_show_report_count = Column(Integer, nullable=False, default=0, server_default=text("0"))
    check_in_at = Column(DateTime, nullable=True)
    is_late = Column(Boolean, nullable=False, default=False, server_default=text("false"))

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    room = relationship("Room", back_populates="reservations")
    user = relationship("User", back_populates="reservations")

    __table_args__ = (
        Index("ix_reservation_room_window", "room_id", "start_time", "end_time"),
    )
