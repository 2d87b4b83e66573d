# app/crud/crud_reservation.py
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from .base import CRUDBase
from app.models.reservation import Reservation, ReservationStatus
from app.schemas.reservation import ReservationCreate, ReservationUpdate


class CRUDReservation(CRUDBase[Reservation, ReservationCreate, ReservationUpdate]):
    def has_time_conflict(
        self,
        db: Session,
        *,
        room_id: int,
        start: datetime,
        end: datetime,
        exclude_id: Optional[int] = None,
    ) -> bool:
        """
        Half-open overlap test on [start, end): back-to-back bookings do not
        conflict. Every row on the room counts, whatever its status.
        """
        query = db.query(self.model.id).filter(
            self.model.room_id == room_id,
            self.model.start_time < end,
            self.model.end_time > start,
        )
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        return db.query(query.exists()).scalar()

    def get_for_update(self, db: Session, *, reservation_id: int) -> Optional[Reservation]:
        return (
            db.query(self.model)
            .filter(self.model.id == reservation_id)
            .with_for_update()
            .first()
        )

    def get_multi_ordered(self, db: Session) -> List[Reservation]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.room), joinedload(self.model.user))
            .order_by(self.model.start_time.asc())
            .all()
        )

    def get_multi_by_user(self, db: Session, *, user_id: int) -> List[Reservation]:
        return (
            db.query(self.model)
            .filter(self.model.user_id == user_id)
            .order_by(self.model.start_time.desc())
            .all()
        )

    def get_multi_by_room(
        self,
        db: Session,
        *,
        room_id: int,
        now: datetime,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Reservation]:
        query = db.query(self.model).filter(self.model.room_id == room_id)
        if start_date and end_date:
            query = query.filter(self.model.start_time.between(start_date, end_date))
        else:
            # Upcoming only unless an explicit window is given
            query = query.filter(self.model.start_time > now)
        return query.order_by(self.model.start_time.asc()).all()

    def get_multi_for_admin(self, db: Session) -> List[Reservation]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.room), joinedload(self.model.user))
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )

    def finish_elapsed(self, db: Session, *, now: datetime) -> int:
        """Bulk confirmed -> finished for every reservation whose end has passed."""
        count = (
            db.query(self.model)
            .filter(
                self.model.status == ReservationStatus.CONFIRMED.value,
                self.model.end_time < now,
            )
            .update(
                {"status": ReservationStatus.FINISHED.value, "updated_at": now},
                synchronize_session=False,
            )
        )
        db.commit()
        return count

    def _overdue_filter(self, query, started_before: datetime):
        return query.filter(
            self.model.status == ReservationStatus.CONFIRMED.value,
            self.model.start_time < started_before,
            self.model.check_in_at.is_(None),
            self.model.is_no_show == False,
        )

    def get_overdue_ids(self, db: Session, *, started_before: datetime) -> List[int]:
        """Confirmed, never checked in, not yet no-show, started before the cutoff."""
        query = self._overdue_filter(db.query(self.model.id), started_before)
        return [row.id for row in query.order_by(self.model.start_time.asc()).all()]

    def get_overdue_for_update(
        self, db: Session, *, reservation_id: int, started_before: datetime
    ) -> Optional[Reservation]:
        """
        Re-check one candidate under a row lock. Returns None when the row is
        locked by a concurrent request or no longer overdue (e.g. just checked in).
        """
        query = self._overdue_filter(
            db.query(self.model).filter(self.model.id == reservation_id),
            started_before,
        )
        return query.with_for_update(skip_locked=True).first()

    def daily_stats(self, db: Session, *, start_date: datetime, end_date: datetime):
        day = func.date(self.model.start_time)
        return (
            db.query(
                day.label("date"),
                func.count(self.model.id).label("total_reservations"),
                func.count(func.distinct(self.model.room_id)).label("rooms_used"),
                func.coalesce(func.sum(self.model.attendees), 0).label("total_attendees"),
            )
            .filter(self.model.start_time.between(start_date, end_date))
            .group_by(day)
            .order_by(day.asc())
            .all()
        )


reservation = CRUDReservation(Reservation)
