# app/api/v1/endpoints/reservations.py
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from app.api import deps
from app.core.limiter import limiter
from app.db.session import get_db
from app.models.user import User
from app.schemas.reservation import (
    Reservation as ReservationSchema,
    ReservationCreate,
    ReservationDayStats,
    ReservationStatusUpdate,
    ReservationUpdate,
)
from app.services.reservation_lifecycle import reservation_service
from app.utils.clock import to_naive_utc

router = APIRouter(prefix="/reservations", tags=["Reservations"])


@router.post("", response_model=ReservationSchema, status_code=status.HTTP_201_CREATED)
def create_reservation(
    reservation_in: ReservationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Book a room.

    Starts as `pending` when the room requires approval, otherwise `confirmed`.

    **Errors**:
    - 400: Bad time range, start in the past, longer than 2 hours
    - 403: User is banned from reservations
    - 404: User or room not found
    - 409: Overlaps an existing reservation of the room
    """
    return reservation_service.create_reservation(db, reservation_in, current_user.id)


@router.get("", response_model=List[ReservationSchema])
def list_reservations(
    room: Optional[int] = Query(None, description="Only reservations of this room"),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    db: Session = Depends(get_db),
):
    """Public calendar feed. With `room` and no window, only upcoming reservations are returned."""
    if room is not None:
        return reservation_service.list_room_reservations(
            db, room, to_naive_utc(start_date), to_naive_utc(end_date)
        )
    return reservation_service.list_reservations(db)


@router.get("/my", response_model=List[ReservationSchema])
def list_my_reservations(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return reservation_service.list_user_reservations(db, current_user.id)


@router.get("/stats", response_model=List[ReservationDayStats])
def get_reservation_stats(
    start_date: datetime,
    end_date: datetime,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Per-day totals: reservations, distinct rooms used, attendees."""
    return reservation_service.reservation_stats(
        db, to_naive_utc(start_date), to_naive_utc(end_date)
    )


# ==================== Admin Endpoints ====================


@router.get("/admin/all", response_model=List[ReservationSchema])
def list_all_for_admin(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    return reservation_service.list_for_admin(db)


@router.patch("/admin/{reservation_id}/cancel", status_code=status.HTTP_204_NO_CONTENT)
def admin_cancel_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Force-cancel (delete) a reservation, ignoring ownership and time rules."""
    reservation_service.admin_cancel(db, reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/admin/{reservation_id}/approve", response_model=ReservationSchema)
def approve_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    return reservation_service.approve_reservation(db, reservation_id)


@router.patch("/admin/{reservation_id}/reject", status_code=status.HTTP_204_NO_CONTENT)
def reject_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Reject a reservation. Rejected reservations are deleted."""
    reservation_service.reject_reservation(db, reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/admin/{reservation_id}/status", response_model=ReservationSchema)
def admin_update_status(
    reservation_id: int,
    body: ReservationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    return reservation_service.admin_update_status(db, reservation_id, body.status)


# ==================== Single Reservation ====================


@router.get("/{reservation_id}", response_model=ReservationSchema)
def get_reservation(reservation_id: int, db: Session = Depends(get_db)):
    return reservation_service.get_reservation(db, reservation_id)


@router.patch("/{reservation_id}", response_model=ReservationSchema)
def update_reservation(
    reservation_id: int,
    reservation_in: ReservationUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Owner-only partial update. Once the reservation has started only a
    status-only update is accepted.
    """
    return reservation_service.update_reservation(
        db, reservation_id, reservation_in, current_user.id
    )


@router.patch("/{reservation_id}/cancel", status_code=status.HTTP_204_NO_CONTENT)
def cancel_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    reservation_service.cancel_reservation(db, reservation_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{reservation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    reservation_service.remove(db, reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{reservation_id}/no-show", response_model=ReservationSchema)
@limiter.limit("20/minute")
def report_no_show(
    reservation_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """
    Report an empty room. Any signed-in user may report once the start
    time has passed; the owner receives the no-show penalty.
    """
    return reservation_service.report_no_show(
        db, reservation_id, reported_by=current_user.id
    )


@router.post("/{reservation_id}/early-return", response_model=ReservationSchema)
def early_return(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return reservation_service.early_return(db, reservation_id, current_user.id)


@router.post("/{reservation_id}/check-in", response_model=ReservationSchema)
def check_in(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return reservation_service.check_in(db, reservation_id, current_user.id)
