# app/models/user.py
import enum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, text
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.utils.clock import utcnow


class Role(str, enum.Enum):
    STUDENT = "student"
    STAFF = "staff"
    ADMIN = "admin"


# Higher number means broader permissions
ROLE_HIERARCHY = {
    Role.STUDENT: 1,
    Role.STAFF: 2,
    Role.ADMIN: 4,
}


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    intra_id = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    is_available = Column(Boolean, nullable=False, default=True, server_default=text("true"))
    profile_img_url = Column(String, nullable=False, default="", server_default="")
    role = Column(String(20), nullable=False, default=Role.STUDENT.value, server_default=Role.STUDENT.value)
    grade = Column(String, nullable=False, default="Cadet", server_default="Cadet")
    last_login_at = Column(DateTime, nullable=True)

    # Penalty state (see app.utils.penalties)
    no_show_count = Column(Integer, nullable=False, default=0, server_default=text("0"))
    last_no_show_at = Column(DateTime, nullable=True)
    late_count = Column(Integer, nullable=False, default=0, server_default=text("0"))
    ban_status = Column(String(20), nullable=False, default="none", server_default="none")  # none, temporary, permanent
    ban_until = Column(DateTime, nullable=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    reservations = relationship("Reservation", back_populates="user")

    @property
    def is_reservation_banned(self) -> bool:
        return self.ban_status != "none"
