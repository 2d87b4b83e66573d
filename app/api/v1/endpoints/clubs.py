# app/api/v1/endpoints/clubs.py
from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.api import deps
from app.db.session import get_db
from app.models.user import User
from app.schemas.club import (
    Club as ClubSchema,
    ClubCreate,
    ClubDetail,
    ClubJoin,
    ClubMember as ClubMemberSchema,
    ClubMemberRoleUpdate,
    ClubMemberStatusUpdate,
    ClubUpdate,
)
from app.services import club_service

router = APIRouter(prefix="/clubs", tags=["Clubs"])


# ========================================
# Admin review
# ========================================


@router.get("/admin/all", response_model=List[ClubSchema])
def admin_list_clubs(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    return club_service.list_clubs(db)


@router.get("/admin/pending", response_model=List[ClubSchema])
def admin_list_pending_clubs(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    """Clubs waiting for approval, newest first."""
    return club_service.list_pending_clubs(db)


@router.patch("/admin/{club_id}/approve", response_model=ClubSchema)
def approve_club(
    club_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    return club_service.approve_club(db, club_id)


@router.patch("/admin/{club_id}/reject", response_model=ClubSchema)
def reject_club(
    club_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    return club_service.reject_club(db, club_id)


# ========================================
# Clubs and membership
# ========================================


@router.post("", response_model=ClubSchema, status_code=status.HTTP_201_CREATED)
def create_club(
    club_in: ClubCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    """Request a new club. It stays `pending` until an admin approves it."""
    leader_id = club_in.leader_id or current_user.id
    return club_service.create_club(db, obj_in=club_in, leader_id=leader_id)


@router.post("/join", response_model=ClubMemberSchema, status_code=status.HTTP_201_CREATED)
def join_club(
    join_in: ClubJoin,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return club_service.join_club(db, club_id=join_in.club_id, user_id=current_user.id)


@router.get("", response_model=List[ClubSchema])
def list_clubs(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return club_service.list_clubs(db)


@router.get("/{club_id}", response_model=ClubDetail)
def get_club(
    club_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return club_service.get_club(db, club_id)


@router.get("/{club_id}/members", response_model=List[ClubMemberSchema])
def list_club_members(
    club_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user),
):
    return club_service.list_members(db, club_id)


@router.patch("/{club_id}", response_model=ClubSchema)
def update_club(
    club_id: int,
    club_in: ClubUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_staff),
):
    return club_service.update_club(db, club_id=club_id, obj_in=club_in)


@router.patch("/{club_id}/members/{user_id}/status", response_model=ClubMemberSchema)
def update_club_member_status(
    club_id: int,
    user_id: int,
    status_in: ClubMemberStatusUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_staff),
):
    return club_service.update_member_status(
        db, club_id=club_id, user_id=user_id, status=status_in.status
    )


@router.patch("/{club_id}/members/{user_id}/role", response_model=ClubMemberSchema)
def update_club_member_role(
    club_id: int,
    user_id: int,
    role_in: ClubMemberRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_staff),
):
    return club_service.update_member_role(
        db, club_id=club_id, user_id=user_id, role=role_in.role
    )


@router.delete("/{club_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_club(
    club_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    """Delete a club together with its memberships."""
    club_service.remove_club(db, club_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
