# app/crud/__init__.py

from .crud_activity_log import activity_log
from .crud_reservation import reservation
from .crud_room import room
from .crud_user import user
from .crud_club import club, club_member
