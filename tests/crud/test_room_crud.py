# tests/crud/test_room_crud.py
from app.crud import room as crud_room
from app.models.activity_log import ActivityLog
from app.schemas.room import RoomCreate, RoomUpdate
from tests.utils.factories import create_random_room


def test_create_room_logs_activity(db_session):
    room = crud_room.create_room(
        db_session, obj_in=RoomCreate(name="Focus Booth", location="5F", capacity=2)
    )

    assert room.id is not None
    assert room.is_available is True
    entry = db_session.query(ActivityLog).one()
    assert entry.type == "room_created"
    assert entry.event_data["room_name"] == "Focus Booth"


def test_update_room_records_changes(db_session):
    room = create_random_room(db_session, name="Old Name")

    updated = crud_room.update_room(
        db_session, db_obj=room, obj_in=RoomUpdate(name="New Name")
    )

    assert updated.name == "New Name"
    entry = db_session.query(ActivityLog).one()
    assert entry.event_data["changes"] == {"name": "New Name"}
    assert "'Old Name'" in entry.description


def test_soft_delete_hides_room(db_session):
    room = create_random_room(db_session)

    crud_room.soft_delete(db_session, db_obj=room)

    assert crud_room.get_available(db_session, room_id=room.id) is None
    assert crud_room.get(db_session, id=room.id) is not None
    assert crud_room.get_for_update(db_session, room_id=room.id) is None
    assert crud_room.get_for_update(db_session, room_id=room.id, available_only=False) is not None


def test_search_skips_unavailable_rooms(db_session):
    create_random_room(db_session, name="Library Nook")
    create_random_room(db_session, name="Library Annex", is_available=False)

    results = crud_room.search(db_session, query="library")

    assert [r.name for r in results] == ["Library Nook"]
