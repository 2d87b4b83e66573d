# tests/services/test_user_penalty_service.py
from datetime import datetime, timedelta

import pytest

from app.core.exceptions import NotFoundError, ReservationConflictError
from app.models.activity_log import ActivityLog
from app.models.user import Role
from app.services import user_penalty_service
from tests.utils.factories import create_random_user

NOW = datetime(2026, 3, 2, 9, 0)


def test_lift_permanent_ban(db_session):
    admin = create_random_user(db_session, role=Role.ADMIN)
    user = create_random_user(db_session, no_show_count=3, ban_status="permanent")

    lifted = user_penalty_service.lift_ban(db_session, user_id=user.id, admin_id=admin.id)

    assert lifted.is_reservation_banned is False
    # Counters survive a lift; only a reset clears them
    assert lifted.no_show_count == 3
    entry = db_session.query(ActivityLog).one()
    assert entry.type == "user_ban_lifted"
    assert entry.event_data["previous_ban"] == "permanent"


def test_lift_ban_of_unbanned_user_conflicts(db_session):
    admin = create_random_user(db_session, role=Role.ADMIN)
    user = create_random_user(db_session)

    with pytest.raises(ReservationConflictError):
        user_penalty_service.lift_ban(db_session, user_id=user.id, admin_id=admin.id)


def test_reset_penalties(db_session):
    admin = create_random_user(db_session, role=Role.ADMIN)
    user = create_random_user(
        db_session,
        no_show_count=1,
        late_count=2,
        ban_status="temporary",
        ban_until=NOW + timedelta(days=3),
    )

    reset = user_penalty_service.reset_penalties(db_session, user_id=user.id, admin_id=admin.id)

    assert reset.no_show_count == 0
    assert reset.late_count == 0
    assert reset.ban_status == "none"
    assert reset.ban_until is None


def test_unknown_user(db_session):
    with pytest.raises(NotFoundError):
        user_penalty_service.reset_penalties(db_session, user_id=777, admin_id=1)
