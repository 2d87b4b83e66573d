# app/models/club.py
import enum

from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import relationship

from app.db.base_class import Base
from app.utils.clock import utcnow


class ClubStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ClubMemberRole(str, enum.Enum):
    MEMBER = "member"
    LEADER = "leader"
    STAFF = "staff"


class ClubMemberStatus(str, enum.Enum):
    FREEZE = "freeze"
    ACTIVE = "active"
    WORK = "work"
    INACTIVE = "inactive"


class Club(Base):
    """
    A student club. New clubs wait for admin approval; the leader is always
    also a member with the `leader` role.
    """
    __tablename__ = "clubs"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, unique=True, index=True)
    leader_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(Text, nullable=True)
    count_member = Column(Integer, nullable=False, default=0, server_default=text("0"))
    status = Column(
        String(20),
        nullable=False,
        default=ClubStatus.PENDING.value,
        server_default=ClubStatus.PENDING.value,
    )

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    leader = relationship("User")
    members = relationship(
        "ClubMember",
        back_populates="club",
        cascade="all, delete-orphan",
        order_by="ClubMember.created_at",
    )


class ClubMember(Base):
    __tablename__ = "club_members"

    id = Column(Integer, primary_key=True, index=True)
    club_id = Column(Integer, ForeignKey("clubs.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(
        String(20),
        nullable=False,
        default=ClubMemberRole.MEMBER.value,
        server_default=ClubMemberRole.MEMBER.value,
    )
    status = Column(
        String(20),
        nullable=False,
        default=ClubMemberStatus.ACTIVE.value,
        server_default=ClubMemberStatus.ACTIVE.value,
    )

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    club = relationship("Club", back_populates="members")
    user = relationship("User")

    __table_args__ = (
        UniqueConstraint("club_id", "user_id", name="uq_club_member"),
    )
