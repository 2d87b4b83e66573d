# app/models/__init__.py
# Import every model so Base.metadata knows all tables before create_all().
from .activity_log import ActivityLog, ActivityType
from .reservation import Reservation, ReservationStatus
from .room import Room
from .user import User, Role, ROLE_HIERARCHY
from .club import Club, ClubMember, ClubMemberRole, ClubMemberStatus, ClubStatus
