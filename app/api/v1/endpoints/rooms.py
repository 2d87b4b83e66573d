# app/api/v1/endpoints/rooms.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import room as crud_room
from app.db.session import get_db
from app.models.user import User
from app.schemas.room import Room as RoomSchema, RoomCreate, RoomUpdate

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get("", response_model=List[RoomSchema])
def list_rooms(db: Session = Depends(get_db)):
    """Bookable rooms, by name."""
    return crud_room.get_multi_available(db)


@router.get("/search", response_model=List[RoomSchema])
def search_rooms(
    q: str = Query(..., min_length=1, description="Matches name, location or description"),
    db: Session = Depends(get_db),
):
    return crud_room.search(db, query=q)


@router.get("/{room_id}", response_model=RoomSchema)
def get_room(room_id: int, db: Session = Depends(get_db)):
    room = crud_room.get_available(db, room_id=room_id)
    if not room:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Room with ID {room_id} not found"
        )
    return room


@router.post("", response_model=RoomSchema, status_code=status.HTTP_201_CREATED)
def create_room(
    room_in: RoomCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    return crud_room.create_room(db, obj_in=room_in)


@router.patch("/{room_id}", response_model=RoomSchema)
def update_room(
    room_id: int,
    room_in: RoomUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_staff),
):
    room = crud_room.get_available(db, room_id=room_id)
    if not room:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Room with ID {room_id} not found"
        )
    return crud_room.update_room(db, db_obj=room, obj_in=room_in)


@router.delete("/{room_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_room(
    room_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    """Soft delete: the room disappears from listings but keeps its history."""
    room = crud_room.get_available(db, room_id=room_id)
    if not room:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Room with ID {room_id} not found"
        )
    crud_room.soft_delete(db, db_obj=room)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
