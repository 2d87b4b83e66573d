# app/services/reservation_lifecycle.py
"""
Reservation Lifecycle Service

Owns a reservation from admission to completion, cancellation or no-show:
- Admission (ban check, time window, duration cap, room overlap)
- Owner operations: update, cancel, check-in, early return
- No-show reporting and the shared no-show routine
- Periodic sweeps (finish elapsed, auto no-show)
- Admin overrides (force cancel, approve, reject, set status)

Every operation accepts ``now`` (naive UTC) so the wall-clock rules can be
driven deterministically; it defaults to the current instant.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import (
    NotFoundError,
    PermissionDeniedError,
    ReservationConflictError,
    ReservationValidationError,
)
from app.crud import activity_log as crud_activity_log
from app.crud import reservation as crud_reservation
from app.crud import room as crud_room
from app.crud import user as crud_user
from app.models.activity_log import ActivityType
from app.models.reservation import Reservation, ReservationStatus
from app.schemas.reservation import ReservationCreate, ReservationUpdate
from app.utils import penalties
from app.utils.clock import utcnow

logger = logging.getLogger(__name__)

MAX_DURATION = timedelta(hours=2)
CHECK_IN_OPENS_BEFORE = timedelta(minutes=10)
LATE_AFTER = timedelta(minutes=10)
NO_SHOW_AFTER = timedelta(minutes=30)

# Fields that cannot be cleared through an update
_REQUIRED_FIELDS = {"title", "start_time", "end_time", "attendees", "status"}


def _validate_window(start: datetime, end: datetime) -> None:
    if start >= end:
        raise ReservationValidationError("Start time must be before end time")
    if end - start > MAX_DURATION:
        raise ReservationValidationError(
            "A single reservation can last at most 2 hours"
        )


class ReservationLifecycleService:
    """Business rules for room reservations and their penalty side effects."""

    # ========================================
    # Reads
    # ========================================

    def get_reservation(self, db: Session, reservation_id: int) -> Reservation:
        reservation = crud_reservation.get(db, id=reservation_id)
        if not reservation:
            raise NotFoundError(f"Reservation with ID {reservation_id} not found")
        return reservation

    def list_reservations(self, db: Session) -> List[Reservation]:
        return crud_reservation.get_multi_ordered(db)

    def list_room_reservations(
        self,
        db: Session,
        room_id: int,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        now: Optional[datetime] = None,
    ) -> List[Reservation]:
        return crud_reservation.get_multi_by_room(
            db,
            room_id=room_id,
            now=now or utcnow(),
            start_date=start_date,
            end_date=end_date,
        )

    def list_user_reservations(self, db: Session, user_id: int) -> List[Reservation]:
        return crud_reservation.get_multi_by_user(db, user_id=user_id)

    def list_for_admin(self, db: Session) -> List[Reservation]:
        return crud_reservation.get_multi_for_admin(db)

    def reservation_stats(self, db: Session, start_date: datetime, end_date: datetime):
        rows = crud_reservation.daily_stats(db, start_date=start_date, end_date=end_date)
        return [
            {
                "date": row.date,
                "total_reservations": row.total_reservations,
                "rooms_used": row.rooms_used,
                "total_attendees": row.total_attendees,
            }
            for row in rows
        ]

    # ========================================
    # Admission
    # ========================================

    def create_reservation(
        self,
        db: Session,
        obj_in: ReservationCreate,
        user_id: int,
        now: Optional[datetime] = None,
    ) -> Reservation:
        now = now or utcnow()

        user = crud_user.get_for_update(db, user_id=user_id)
        if not user:
            raise NotFoundError("User not found")

        was_banned = user.is_reservation_banned
        penalties.ensure_can_reserve(user, now)
        if was_banned:
            # The expired ban stays lifted even if admission fails below
            db.commit()

        start, end = obj_in.start_time, obj_in.end_time
        if start >= end:
            raise ReservationValidationError("Start time must be before end time")
        if start < now:
            raise ReservationValidationError("Reservations cannot start in the past")
        _validate_window(start, end)

        room = crud_room.get_for_update(db, room_id=obj_in.room_id)
        if not room:
            db.rollback()
            raise NotFoundError("Room not found")

        if crud_reservation.has_time_conflict(db, room_id=room.id, start=start, end=end):
            db.rollback()
            raise ReservationConflictError(
                "The room is already booked for part of that time"
            )

        status = (
            ReservationStatus.PENDING if room.is_confirm else ReservationStatus.CONFIRMED
        )
        reservation = Reservation(
            room_id=room.id,
            user_id=user.id,
            title=obj_in.title,
            description=obj_in.description,
            start_time=start,
            end_time=end,
            attendees=obj_in.attendees or 0,
            team_name=obj_in.team_name,
            status=status.value,
        )
        db.add(reservation)
        db.commit()
        db.refresh(reservation)

        logger.info(
            f"Reservation {reservation.id} created for room {room.id} "
            f"by user {user.id} ({reservation.status})"
        )
        crud_activity_log.log_activity(
            db,
            type=ActivityType.RESERVATION_CREATED,
            title="Reservation created",
            description=f"'{reservation.title}' in '{room.name}'",
            user_id=user.id,
            metadata={"reservation_id": reservation.id, "room_id": room.id},
            level="success",
        )
        return reservation

    # ========================================
    # Owner operations
    # ========================================

    def _get_owned(self, db: Session, reservation_id: int, user_id: int, action: str):
        reservation = crud_reservation.get_for_update(db, reservation_id=reservation_id)
        if not reservation:
            raise NotFoundError(f"Reservation with ID {reservation_id} not found")
        if reservation.user_id != user_id:
            db.rollback()
            raise PermissionDeniedError(f"You can only {action} your own reservations")
        return reservation

    def update_reservation(
        self,
        db: Session,
        reservation_id: int,
        obj_in: ReservationUpdate,
        user_id: int,
        now: Optional[datetime] = None,
    ) -> Reservation:
        now = now or utcnow()
        reservation = self._get_owned(db, reservation_id, user_id, "modify")

        changes = obj_in.model_dump(exclude_unset=True)
        for field in _REQUIRED_FIELDS:
            if field in changes and changes[field] is None:
                changes.pop(field)

        # Owners may set any status, pending -> confirmed included; admin approval is not re-checked
        is_status_only = set(changes) == {"status"}
        if reservation.start_time < now and not is_status_only:
            db.rollback()
            raise ReservationConflictError(
                "Reservations that have already started cannot be modified"
            )

        if "start_time" in changes or "end_time" in changes:
            new_start = changes.get("start_time", reservation.start_time)
            new_end = changes.get("end_time", reservation.end_time)
            try:
                _validate_window(new_start, new_end)
            except ReservationValidationError:
                db.rollback()
                raise

            crud_room.get_for_update(db, room_id=reservation.room_id, available_only=False)
            if crud_reservation.has_time_conflict(
                db,
                room_id=reservation.room_id,
                start=new_start,
                end=new_end,
                exclude_id=reservation.id,
            ):
                db.rollback()
                raise ReservationConflictError(
                    "The room is already booked for part of that time"
                )

        if "status" in changes:
            changes["status"] = ReservationStatus(changes["status"]).value

        for field, value in changes.items():
            setattr(reservation, field, value)
        db.commit()
        db.refresh(reservation)
        return reservation

    def cancel_reservation(
        self,
        db: Session,
        reservation_id: int,
        user_id: int,
        now: Optional[datetime] = None,
    ) -> None:
        now = now or utcnow()
        reservation = self._get_owned(db, reservation_id, user_id, "cancel")

        if reservation.start_time < now:
            db.rollback()
            raise ReservationConflictError(
                "Reservations that have already started cannot be cancelled"
            )

        title, room_id = reservation.title, reservation.room_id
        db.delete(reservation)
        db.commit()

        logger.info(f"Reservation {reservation_id} cancelled by owner {user_id}")
        crud_activity_log.log_activity(
            db,
            type=ActivityType.RESERVATION_CANCELLED,
            title="Reservation cancelled",
            description=f"'{title}' was cancelled by its owner",
            user_id=user_id,
            metadata={"reservation_id": reservation_id, "room_id": room_id},
        )

    def check_in(
        self,
        db: Session,
        reservation_id: int,
        user_id: int,
        now: Optional[datetime] = None,
    ) -> Reservation:
        """
        Check-in window is [start - 10min, start + 30min]. After start + 10min
        the check-in counts as late; past the window the sweep owns the row.
        """
        now = now or utcnow()
        reservation = self._get_owned(db, reservation_id, user_id, "check in to")

        rejection = None
        if reservation.status != ReservationStatus.CONFIRMED.value:
            rejection = "Only confirmed reservations can be checked in"
        elif reservation.check_in_at is not None:
            rejection = "This reservation is already checked in"
        elif reservation.is_no_show:
            rejection = "No-show reservations cannot be checked in"
        elif now < reservation.start_time - CHECK_IN_OPENS_BEFORE:
            rejection = "Check-in opens 10 minutes before the start time"
        elif now > reservation.start_time + NO_SHOW_AFTER:
            rejection = "Check-in closed 30 minutes after the start time"
        if rejection:
            db.rollback()
            raise ReservationConflictError(rejection)

        reservation.check_in_at = now

        converted = False
        if now > reservation.start_time + LATE_AFTER:
            reservation.is_late = True
            user = crud_user.get_for_update(db, user_id=reservation.user_id)
            if user:
                converted = penalties.record_late(user, now)

        db.commit()
        db.refresh(reservation)

        if converted:
            crud_activity_log.log_activity(
                db,
                type=ActivityType.USER_PENALISED,
                title="Late check-ins converted to a no-show",
                description=f"User {reservation.user_id} reached {penalties.LATE_THRESHOLD} late check-ins",
                user_id=reservation.user_id,
                metadata={"reservation_id": reservation.id, "reason": "late"},
                level="warning",
            )
        return reservation

    def early_return(
        self,
        db: Session,
        reservation_id: int,
        user_id: int,
        now: Optional[datetime] = None,
    ) -> Reservation:
        now = now or utcnow()
        reservation = self._get_owned(db, reservation_id, user_id, "return")

        rejection = None
        if reservation.is_no_show:
            rejection = "No-show reservations cannot be returned early"
        elif reservation.status == ReservationStatus.CANCELLED.value:
            rejection = "Cancelled reservations cannot be returned early"
        elif reservation.check_in_at is None:
            rejection = "Early return is only possible after check-in"
        elif reservation.start_time >= now:
            rejection = "Early return is only possible after the start time"
        elif reservation.end_time <= now:
            rejection = "This reservation has already ended"
        if rejection:
            db.rollback()
            raise ReservationConflictError(rejection)

        reservation.end_time = now
        reservation.status = ReservationStatus.FINISHED.value
        db.commit()
        db.refresh(reservation)
        return reservation

    # ========================================
    # No-show
    # ========================================

    def mark_as_no_show(self, db: Session, reservation: Reservation, now: datetime) -> None:
        """
        Shared no-show routine used by manual reports and the sweep.
        Mutates the reservation and its owner; the caller commits.
        """
        reservation.is_no_show = True
        reservation.no_show_reported_at = now
        reservation.no_show_report_count = (reservation.no_show_report_count or 0) + 1
        reservation.status = ReservationStatus.CANCELLED.value

        user = crud_user.get_for_update(db, user_id=reservation.user_id)
        if user:
            penalties.record_no_show(user, now)

    def report_no_show(
        self,
        db: Session,
        reservation_id: int,
        reported_by: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> Reservation:
        now = now or utcnow()
        reservation = crud_reservation.get_for_update(db, reservation_id=reservation_id)
        if not reservation:
            raise NotFoundError(f"Reservation with ID {reservation_id} not found")

        if reservation.start_time > now:
            db.rollback()
            raise ReservationConflictError(
                "No-show can only be reported after the reservation has started"
            )
        if reservation.is_no_show:
            db.rollback()
            raise ReservationConflictError("This reservation is already marked as no-show")

        self.mark_as_no_show(db, reservation, now)
        db.commit()
        db.refresh(reservation)

        logger.info(f"Reservation {reservation.id} reported as no-show by user {reported_by}")
        crud_activity_log.log_activity(
            db,
            type=ActivityType.USER_PENALISED,
            title="No-show reported",
            description=f"Reservation '{reservation.title}' was reported as a no-show",
            user_id=reservation.user_id,
            metadata={"reservation_id": reservation.id, "reported_by": reported_by},
            level="warning",
        )
        return reservation

    # ========================================
    # Sweeps
    # ========================================

    def finish_elapsed_reservations(self, db: Session, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        return crud_reservation.finish_elapsed(db, now=now)

    def mark_overdue_no_shows(self, db: Session, now: Optional[datetime] = None) -> int:
        """
        Apply the no-show routine to every confirmed reservation that started
        more than 30 minutes ago without a check-in. Each row is re-checked
        under its own lock and committed on its own; a failing row is logged
        and skipped.
        """
        now = now or utcnow()
        cutoff = now - NO_SHOW_AFTER
        candidate_ids = crud_reservation.get_overdue_ids(db, started_before=cutoff)

        marked = 0
        for reservation_id in candidate_ids:
            try:
                reservation = crud_reservation.get_overdue_for_update(
                    db, reservation_id=reservation_id, started_before=cutoff
                )
                if reservation is None:
                    db.rollback()
                    continue
                self.mark_as_no_show(db, reservation, now)
                db.commit()
                marked += 1
            except Exception as e:
                db.rollback()
                logger.error(
                    f"Failed to mark reservation {reservation_id} as no-show: {e}",
                    exc_info=True,
                )
        return marked

    # ========================================
    # Admin overrides
    # ========================================

    def _get_for_admin(self, db: Session, reservation_id: int) -> Reservation:
        reservation = crud_reservation.get_for_update(db, reservation_id=reservation_id)
        if not reservation:
            raise NotFoundError(f"Reservation with ID {reservation_id} not found")
        return reservation

    def admin_cancel(self, db: Session, reservation_id: int) -> None:
        reservation = self._get_for_admin(db, reservation_id)
        title = reservation.title
        db.delete(reservation)
        db.commit()
        crud_activity_log.log_activity(
            db,
            type=ActivityType.RESERVATION_CANCELLED,
            title="Reservation cancelled by admin",
            description=f"'{title}' was force-cancelled",
            metadata={"reservation_id": reservation_id},
            level="warning",
        )

    def remove(self, db: Session, reservation_id: int) -> None:
        reservation = self._get_for_admin(db, reservation_id)
        db.delete(reservation)
        db.commit()

    def approve_reservation(self, db: Session, reservation_id: int) -> Reservation:
        reservation = self._get_for_admin(db, reservation_id)
        if reservation.status == ReservationStatus.CONFIRMED.value:
            db.rollback()
            raise ReservationConflictError("This reservation is already approved")

        reservation.status = ReservationStatus.CONFIRMED.value
        db.commit()
        db.refresh(reservation)
        crud_activity_log.log_activity(
            db,
            type=ActivityType.RESERVATION_APPROVED,
            title="Reservation approved",
            description=f"'{reservation.title}' was approved",
            user_id=reservation.user_id,
            metadata={"reservation_id": reservation.id},
            level="success",
        )
        return reservation

    def reject_reservation(self, db: Session, reservation_id: int) -> None:
        reservation = self._get_for_admin(db, reservation_id)
        title, owner_id = reservation.title, reservation.user_id
        db.delete(reservation)
        db.commit()
        crud_activity_log.log_activity(
            db,
            type=ActivityType.RESERVATION_REJECTED,
            title="Reservation rejected",
            description=f"'{title}' was rejected",
            user_id=owner_id,
            metadata={"reservation_id": reservation_id},
            level="warning",
        )

    def admin_update_status(
        self, db: Session, reservation_id: int, status: ReservationStatus
    ) -> Reservation:
        reservation = self._get_for_admin(db, reservation_id)
        reservation.status = ReservationStatus(status).value
        db.commit()
        db.refresh(reservation)
        return reservation


# Create singleton instance
reservation_service = ReservationLifecycleService()
