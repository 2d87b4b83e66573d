# tests/crud/test_reservation_crud.py
from datetime import datetime, timedelta

import pytest

from app.crud import reservation as crud_reservation
from app.models.reservation import ReservationStatus
from tests.utils.factories import (
    create_random_room,
    create_random_user,
    create_reservation_row,
)

NOW = datetime(2026, 3, 2, 9, 0)
SLOT_START = datetime(2026, 3, 2, 14, 0)
SLOT_END = datetime(2026, 3, 2, 15, 0)


@pytest.fixture
def booked_room(db_session):
    user = create_random_user(db_session)
    room = create_random_room(db_session)
    reservation = create_reservation_row(db_session, user=user, room=room, start=SLOT_START)
    return room, reservation


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (SLOT_START, SLOT_END, True),
        (SLOT_START - timedelta(minutes=30), SLOT_START + timedelta(minutes=1), True),
        (SLOT_START + timedelta(minutes=10), SLOT_START + timedelta(minutes=20), True),
        (SLOT_START - timedelta(hours=1), SLOT_END + timedelta(hours=1), True),
        (SLOT_START - timedelta(hours=1), SLOT_START, False),
        (SLOT_END, SLOT_END + timedelta(hours=1), False),
    ],
)
def test_has_time_conflict(db_session, booked_room, start, end, expected):
    room, _ = booked_room

    assert crud_reservation.has_time_conflict(db_session, room_id=room.id, start=start, end=end) is expected


def test_has_time_conflict_excludes_self(db_session, booked_room):
    room, reservation = booked_room

    assert not crud_reservation.has_time_conflict(
        db_session,
        room_id=room.id,
        start=SLOT_START,
        end=SLOT_END,
        exclude_id=reservation.id,
    )


def test_has_time_conflict_is_per_room(db_session, booked_room):
    other_room = create_random_room(db_session)

    assert not crud_reservation.has_time_conflict(
        db_session, room_id=other_room.id, start=SLOT_START, end=SLOT_END
    )


def test_has_time_conflict_counts_cancelled_rows(db_session):
    user = create_random_user(db_session)
    room = create_random_room(db_session)
    create_reservation_row(
        db_session, user=user, room=room, start=SLOT_START, status=ReservationStatus.CANCELLED
    )

    assert crud_reservation.has_time_conflict(
        db_session, room_id=room.id, start=SLOT_START, end=SLOT_END
    )


def test_get_overdue_ids(db_session):
    user = create_random_user(db_session)
    room = create_random_room(db_session)
    cutoff = NOW - timedelta(minutes=30)
    oldest = create_reservation_row(db_session, user=user, room=room, start=NOW - timedelta(hours=3))
    older = create_reservation_row(db_session, user=user, room=room, start=NOW - timedelta(hours=1))
    create_reservation_row(db_session, user=user, room=room, start=NOW - timedelta(minutes=10))
    create_reservation_row(
        db_session, user=user, room=room, start=NOW - timedelta(hours=5), is_no_show=True
    )

    assert crud_reservation.get_overdue_ids(db_session, started_before=cutoff) == [oldest.id, older.id]


def test_get_overdue_for_update_rechecks_row(db_session):
    user = create_random_user(db_session)
    room = create_random_room(db_session)
    cutoff = NOW - timedelta(minutes=30)
    reservation = create_reservation_row(
        db_session, user=user, room=room, start=NOW - timedelta(hours=1)
    )

    assert crud_reservation.get_overdue_for_update(
        db_session, reservation_id=reservation.id, started_before=cutoff
    ) is reservation

    reservation.check_in_at = NOW - timedelta(minutes=50)
    db_session.commit()

    assert crud_reservation.get_overdue_for_update(
        db_session, reservation_id=reservation.id, started_before=cutoff
    ) is None


def test_get_multi_by_room_window(db_session):
    user = create_random_user(db_session)
    room = create_random_room(db_session)
    morning = create_reservation_row(db_session, user=user, room=room, start=NOW)
    create_reservation_row(db_session, user=user, room=room, start=NOW + timedelta(days=2))

    rows = crud_reservation.get_multi_by_room(
        db_session,
        room_id=room.id,
        now=NOW + timedelta(days=1),
        start_date=NOW - timedelta(hours=1),
        end_date=NOW + timedelta(hours=12),
    )

    assert [r.id for r in rows] == [morning.id]
