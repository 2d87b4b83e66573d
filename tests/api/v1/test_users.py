# tests/api/v1/test_users.py
from datetime import timedelta

from fastapi.testclient import TestClient

from app.models.user import Role
from app.utils.clock import utcnow
from tests.utils.auth import get_user_authentication_headers
from tests.utils.factories import (
    create_random_room,
    create_random_user,
    create_reservation_row,
)


def test_read_me_includes_penalty_state(test_client: TestClient, db_session):
    user = create_random_user(
        db_session,
        no_show_count=1,
        ban_status="temporary",
        ban_until=utcnow() + timedelta(days=2),
    )

    response = test_client.get("/api/v1/users/me", headers=get_user_authentication_headers(user))

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == user.id
    assert data["no_show_count"] == 1
    assert data["is_reservation_banned"] is True
    assert data["ban_until"] is not None


def test_disabled_user_is_unauthorised(test_client: TestClient, db_session):
    user = create_random_user(db_session, is_available=False)

    response = test_client.get("/api/v1/users/me", headers=get_user_authentication_headers(user))

    assert response.status_code == 401


def test_list_users_with_reservation_count(test_client: TestClient, db_session):
    staff = create_random_user(db_session, role=Role.STAFF)
    busy = create_random_user(db_session)
    room = create_random_room(db_session)
    start = utcnow() + timedelta(days=1)
    create_reservation_row(db_session, user=busy, room=room, start=start)
    create_reservation_row(db_session, user=busy, room=room, start=start + timedelta(hours=2))

    response = test_client.get("/api/v1/users", headers=get_user_authentication_headers(staff))

    assert response.status_code == 200
    counts = {row["id"]: row["reservation_count"] for row in response.json()}
    assert counts == {staff.id: 0, busy.id: 2}


def test_list_users_requires_staff(test_client: TestClient, db_session):
    student = create_random_user(db_session)

    response = test_client.get("/api/v1/users", headers=get_user_authentication_headers(student))

    assert response.status_code == 403


def test_update_role(test_client: TestClient, db_session):
    admin = create_random_user(db_session, role=Role.ADMIN)
    user = create_random_user(db_session)

    response = test_client.patch(
        f"/api/v1/users/{user.id}/role",
        json={"role": "staff"},
        headers=get_user_authentication_headers(admin),
    )

    assert response.status_code == 200
    assert response.json()["role"] == "staff"


def test_lift_ban_and_reset(test_client: TestClient, db_session):
    admin = create_random_user(db_session, role=Role.ADMIN)
    user = create_random_user(db_session, no_show_count=3, ban_status="permanent")
    headers = get_user_authentication_headers(admin)

    lifted = test_client.post(f"/api/v1/users/{user.id}/ban/lift", headers=headers)
    lift_again = test_client.post(f"/api/v1/users/{user.id}/ban/lift", headers=headers)
    reset = test_client.post(f"/api/v1/users/{user.id}/penalties/reset", headers=headers)

    assert lifted.status_code == 200
    assert lifted.json()["is_reservation_banned"] is False
    assert lifted.json()["no_show_count"] == 3
    assert lift_again.status_code == 409
    assert reset.status_code == 200
    assert reset.json()["no_show_count"] == 0


def test_lift_ban_unknown_user(test_client: TestClient, db_session):
    admin = create_random_user(db_session, role=Role.ADMIN)

    response = test_client.post(
        "/api/v1/users/999/ban/lift", headers=get_user_authentication_headers(admin)
    )

    assert response.status_code == 404


def test_get_user_by_intra_id(test_client: TestClient, db_session):
    staff = create_random_user(db_session, role=Role.STAFF)
    user = create_random_user(db_session, intra_id="jdoe")
    headers = get_user_authentication_headers(staff)

    found = test_client.get("/api/v1/users/intra/jdoe", headers=headers)
    missing = test_client.get("/api/v1/users/intra/nobody", headers=headers)

    assert found.status_code == 200
    assert found.json()["id"] == user.id
    assert missing.status_code == 404


def test_get_user_by_intra_id_requires_staff(test_client: TestClient, db_session):
    student = create_random_user(db_session)

    response = test_client.get(
        f"/api/v1/users/intra/{student.intra_id}",
        headers=get_user_authentication_headers(student),
    )

    assert response.status_code == 403
