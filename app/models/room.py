# app/models/room.py
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, text
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.utils.clock import utcnow


class Room(Base):
    __tablename__ = "room"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String, nullable=True)
    capacity = Column(Integer, nullable=True)
    equipment = Column(Text, nullable=True)

    # Soft-delete flag: removed rooms stay referenced by past reservations
    is_available = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    # New reservations start as 'pending' when the room needs approval
    is_confirm = Column(Boolean, nullable=False, default=True, server_default=text("true"))

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    reservations = relationship("Reservation", back_populates="room")
