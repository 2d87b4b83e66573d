# app/api/v1/endpoints/users.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import user as crud_user
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import RoleUpdate, User as UserSchema, UserWithReservationCount
from app.services import user_penalty_service

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=UserSchema)
def read_current_user(current_user: User = Depends(deps.get_current_user)):
    """Profile and penalty state of the signed-in user."""
    return current_user


@router.get("", response_model=List[UserWithReservationCount])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_staff),
):
    rows = crud_user.get_multi_with_reservation_count(db)
    return [
        UserWithReservationCount.model_validate(user).model_copy(
            update={"reservation_count": count}
        )
        for user, count in rows
    ]


@router.get("/intra/{intra_id}", response_model=UserSchema)
def get_user_by_intra_id(
    intra_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_staff),
):
    """Look a user up by their campus intra login."""
    user = crud_user.get_by_intra_id(db, intra_id=intra_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.patch("/{user_id}/role", response_model=UserSchema)
def update_user_role(
    user_id: int,
    body: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    user = crud_user.get(db, id=user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return crud_user.update_role(db, db_obj=user, role=body.role)


@router.post("/{user_id}/ban/lift", response_model=UserSchema)
def lift_user_ban(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Lift a temporary or permanent reservation ban. Counters are kept."""
    return user_penalty_service.lift_ban(db, user_id=user_id, admin_id=current_user.id)


@router.post("/{user_id}/penalties/reset", response_model=UserSchema)
def reset_user_penalties(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    """**[ADMIN]** Clear the ban and reset the no-show and late counters."""
    return user_penalty_service.reset_penalties(db, user_id=user_id, admin_id=current_user.id)
