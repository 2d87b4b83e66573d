# tests/api/v1/test_admin.py
from fastapi.testclient import TestClient

from app.models.user import Role
from tests.utils.auth import get_user_authentication_headers
from tests.utils.factories import create_random_user


def test_recent_activities(test_client: TestClient, db_session):
    admin = create_random_user(db_session, role=Role.ADMIN)
    headers = get_user_authentication_headers(admin)
    for name in ("Room 1", "Room 2", "Room 3"):
        test_client.post(
            "/api/v1/rooms", json={"name": name, "location": "1F", "capacity": 6}, headers=headers
        )

    response = test_client.get(
        "/api/v1/admin/activities/recent", params={"limit": 2}, headers=headers
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    assert data[0]["description"] == "'Room 3' was added"
    assert data[0]["type"] == "room_created"


def test_recent_activities_requires_admin(test_client: TestClient, db_session):
    staff = create_random_user(db_session, role=Role.STAFF)

    response = test_client.get(
        "/api/v1/admin/activities/recent", headers=get_user_authentication_headers(staff)
    )

    assert response.status_code == 403


def test_scheduler_status_when_disabled(test_client: TestClient, db_session):
    admin = create_random_user(db_session, role=Role.ADMIN)

    response = test_client.get(
        "/api/v1/admin/scheduler", headers=get_user_authentication_headers(admin)
    )

    assert response.status_code == 200
    assert response.json() == {"status": "not_initialized", "jobs": []}


def test_health(test_client: TestClient):
    response = test_client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
