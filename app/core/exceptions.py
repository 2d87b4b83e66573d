# app/core/exceptions.py
"""
Domain errors raised by the reservation core.

Each error maps to one HTTP status in ``app.main``; everything here is a
caller-recoverable rejection, never a process-level failure.
"""

from datetime import datetime
from typing import Optional


class ReservationError(Exception):
    """Base class for rejected reservation operations."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotFoundError(ReservationError):
    status_code = 404


class ReservationValidationError(ReservationError):
    """Bad time range, excessive duration, start in the past, bad field."""

    status_code = 400


class ConflictError(ReservationError):
    """The request clashes with existing state (duplicate name, membership)."""

    status_code = 409


class ReservationConflictError(ConflictError):
    """Double booking or an operation that does not fit the current state."""


class PermissionDeniedError(ReservationError):
    status_code = 403


class BanError(ReservationError):
    """The user may not create reservations right now."""

    status_code = 403

    def __init__(
        self,
        message: str,
        *,
        ban_until: Optional[datetime] = None,
        permanent: bool = False,
    ):
        self.ban_until = ban_until
        self.permanent = permanent
        super().__init__(message)
