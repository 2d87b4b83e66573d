# tests/crud/test_activity_log_crud.py
from unittest.mock import MagicMock

from app.crud import activity_log as crud_activity_log
from app.models.activity_log import ActivityType


def test_get_recent_newest_first(db_session):
    for i in range(3):
        crud_activity_log.log_activity(
            db_session, type=ActivityType.ROOM_UPDATED, title=f"Update {i}"
        )

    recent = crud_activity_log.get_recent(db_session, limit=2)

    assert [entry.title for entry in recent] == ["Update 2", "Update 1"]
    assert recent[0].level == "info"
    assert recent[0].event_data == {}


def test_log_activity_swallows_storage_errors():
    db = MagicMock()
    db.commit.side_effect = RuntimeError("disk full")

    result = crud_activity_log.log_activity(
        db, type=ActivityType.ROOM_DELETED, title="Room removed"
    )

    assert result is None
    db.rollback.assert_called_once()
