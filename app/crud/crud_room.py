# app/crud/crud_room.py
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .base import CRUDBase
from app.crud.crud_activity_log import activity_log
from app.models.activity_log import ActivityType
from app.models.room import Room
from app.schemas.room import RoomCreate, RoomUpdate


class CRUDRoom(CRUDBase[Room, RoomCreate, RoomUpdate]):
    def get_available(self, db: Session, *, room_id: int) -> Optional[Room]:
        return (
            db.query(self.model)
            .filter(self.model.id == room_id, self.model.is_available == True)
            .first()
        )

    def get_for_update(
        self, db: Session, *, room_id: int, available_only: bool = True
    ) -> Optional[Room]:
        """Lock the room row so bookings of the same room serialise."""
        query = db.query(self.model).filter(self.model.id == room_id)
        if available_only:
            query = query.filter(self.model.is_available == True)
        return query.with_for_update().first()

    def get_multi_available(self, db: Session) -> List[Room]:
        return (
            db.query(self.model)
            .filter(self.model.is_available == True)
            .order_by(self.model.name.asc())
            .all()
        )

    def search(self, db: Session, *, query: str) -> List[Room]:
        pattern = f"%{query}%"
        return (
            db.query(self.model)
            .filter(
                self.model.is_available == True,
                or_(
                    self.model.name.ilike(pattern),
                    self.model.location.ilike(pattern),
                    self.model.description.ilike(pattern),
                ),
            )
            .order_by(self.model.name.asc())
            .all()
        )

    def create_room(self, db: Session, *, obj_in: RoomCreate) -> Room:
        room = self.create(db, obj_in=obj_in)
        activity_log.log_activity(
            db,
            type=ActivityType.ROOM_CREATED,
            title="Room created",
            description=f"'{room.name}' was added",
            metadata={"room_id": room.id, "room_name": room.name, "location": room.location},
            level="success",
        )
        return room

    def update_room(self, db: Session, *, db_obj: Room, obj_in: RoomUpdate) -> Room:
        old_name = db_obj.name
        changes = obj_in.model_dump(exclude_unset=True)
        room = self.update(db, db_obj=db_obj, obj_in=changes)
        activity_log.log_activity(
            db,
            type=ActivityType.ROOM_UPDATED,
            title="Room updated",
            description=f"'{old_name}' room details were changed",
            metadata={"room_id": room.id, "room_name": room.name, "changes": changes},
        )
        return room

    def soft_delete(self, db: Session, *, db_obj: Room) -> Room:
        db_obj.is_available = False
        db.commit()
        db.refresh(db_obj)
        activity_log.log_activity(
            db,
            type=ActivityType.ROOM_DELETED,
            title="Room removed",
            description=f"'{db_obj.name}' is no longer bookable",
            metadata={"room_id": db_obj.id},
            level="warning",
        )
        return db_obj


room = CRUDRoom(Room)
