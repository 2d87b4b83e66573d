# app/services/club_service.py
"""
Club management.

A club is created as `pending` with its leader as the first member, and an
administrator approves or rejects it. Club names are unique. `count_member`
tracks the number of membership rows and is only changed here.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.crud import activity_log as crud_activity_log
from app.crud import club as crud_club
from app.crud import club_member as crud_club_member
from app.crud import user as crud_user
from app.models.activity_log import ActivityType
from app.models.club import (
    Club,
    ClubMember,
    ClubMemberRole,
    ClubMemberStatus,
    ClubStatus,
)
from app.schemas.club import ClubCreate, ClubUpdate

logger = logging.getLogger(__name__)


def _get_club_for_update(db: Session, club_id: int) -> Club:
    club = crud_club.get_for_update(db, club_id=club_id)
    if not club:
        raise NotFoundError("Club not found")
    return club


def _get_membership(db: Session, club_id: int, user_id: int) -> ClubMember:
    member = crud_club_member.get_membership(db, club_id=club_id, user_id=user_id)
    if not member:
        raise NotFoundError("Club member not found")
    return member


# ========================================
# Reads
# ========================================


def list_clubs(db: Session) -> List[Club]:
    return crud_club.get_multi_ordered(db)


def list_pending_clubs(db: Session) -> List[Club]:
    return crud_club.get_pending(db)


def get_club(db: Session, club_id: int) -> Club:
    club = crud_club.get_detail(db, club_id=club_id)
    if not club:
        raise NotFoundError("Club not found")
    return club


def list_members(db: Session, club_id: int) -> List[ClubMember]:
    if not crud_club.get(db, id=club_id):
        raise NotFoundError("Club not found")
    return crud_club_member.get_multi_by_club(db, club_id=club_id)


# ========================================
# Create / update / remove
# ========================================


def create_club(db: Session, *, obj_in: ClubCreate, leader_id: int) -> Club:
    if crud_club.get_by_name(db, name=obj_in.name):
        raise ConflictError("A club with this name already exists")

    leader = crud_user.get(db, id=leader_id)
    if not leader:
        raise NotFoundError("Leader user not found")

    club = Club(
        name=obj_in.name,
        leader_id=leader.id,
        description=obj_in.description,
        count_member=1,
        status=ClubStatus.PENDING.value,
    )
    db.add(club)
    db.flush()
    db.add(
        ClubMember(
            club_id=club.id,
            user_id=leader.id,
            role=ClubMemberRole.LEADER.value,
            status=ClubMemberStatus.ACTIVE.value,
        )
    )
    db.commit()
    db.refresh(club)

    logger.info(f"Club {club.id} '{club.name}' requested by user {leader.id}")
    crud_activity_log.log_activity(
        db,
        type=ActivityType.CLUB_CREATED,
        title="Club requested",
        description=f"'{club.name}' is waiting for approval",
        user_id=leader.id,
        metadata={"club_id": club.id, "club_name": club.name, "status": club.status},
    )
    return club


def _hand_over_leadership(db: Session, club: Club, new_leader_id: int) -> None:
    if not crud_user.get(db, id=new_leader_id):
        raise NotFoundError("New leader user not found")

    old_leader = crud_club_member.get_membership(db, club_id=club.id, user_id=club.leader_id)
    if old_leader:
        old_leader.role = ClubMemberRole.MEMBER.value

    new_leader = crud_club_member.get_membership(db, club_id=club.id, user_id=new_leader_id)
    if new_leader:
        new_leader.role = ClubMemberRole.LEADER.value
    else:
        db.add(
            ClubMember(
                club_id=club.id,
                user_id=new_leader_id,
                role=ClubMemberRole.LEADER.value,
                status=ClubMemberStatus.ACTIVE.value,
            )
        )
        club.count_member += 1

    club.leader_id = new_leader_id


def update_club(db: Session, *, club_id: int, obj_in: ClubUpdate) -> Club:
    club = _get_club_for_update(db, club_id)
    changes = obj_in.model_dump(exclude_unset=True)

    try:
        new_name = changes.pop("name", None)
        if new_name and new_name != club.name:
            if crud_club.get_by_name(db, name=new_name):
                raise ConflictError("A club with this name already exists")
            club.name = new_name

        new_leader_id = changes.pop("leader_id", None)
        if new_leader_id and new_leader_id != club.leader_id:
            _hand_over_leadership(db, club, new_leader_id)
    except (ConflictError, NotFoundError):
        db.rollback()
        raise

    if "description" in changes:
        club.description = changes["description"]

    db.commit()
    db.refresh(club)

    crud_activity_log.log_activity(
        db,
        type=ActivityType.CLUB_UPDATED,
        title="Club updated",
        description=f"'{club.name}' club details were changed",
        metadata={
            "club_id": club.id,
            "club_name": club.name,
            "changes": obj_in.model_dump(exclude_unset=True),
        },
    )
    return club


def remove_club(db: Session, club_id: int) -> None:
    club = _get_club_for_update(db, club_id)
    name = club.name
    db.delete(club)
    db.commit()

    logger.info(f"Club {club_id} '{name}' deleted")
    crud_activity_log.log_activity(
        db,
        type=ActivityType.CLUB_DELETED,
        title="Club deleted",
        description=f"'{name}' was deleted",
        metadata={"club_id": club_id, "club_name": name},
        level="warning",
    )


# ========================================
# Membership
# ========================================


def join_club(db: Session, *, club_id: int, user_id: int) -> ClubMember:
    club = _get_club_for_update(db, club_id)

    if not crud_user.get(db, id=user_id):
        db.rollback()
        raise NotFoundError("User not found")
    if crud_club_member.get_membership(db, club_id=club.id, user_id=user_id):
        db.rollback()
        raise ConflictError("Already a member of this club")

    member = ClubMember(
        club_id=club.id,
        user_id=user_id,
        role=ClubMemberRole.MEMBER.value,
        status=ClubMemberStatus.ACTIVE.value,
    )
    db.add(member)
    club.count_member += 1
    db.commit()
    db.refresh(member)

    logger.info(f"User {user_id} joined club {club.id}")
    return member


def update_member_status(
    db: Session, *, club_id: int, user_id: int, status: ClubMemberStatus
) -> ClubMember:
    member = _get_membership(db, club_id, user_id)
    member.status = ClubMemberStatus(status).value
    db.commit()
    db.refresh(member)
    return member


def update_member_role(
    db: Session, *, club_id: int, user_id: int, role: ClubMemberRole
) -> ClubMember:
    """
    Promoting a member to leader demotes the current leader to member and
    moves the club's `leader_id`.
    """
    member = _get_membership(db, club_id, user_id)
    role = ClubMemberRole(role)

    if role is ClubMemberRole.LEADER:
        current_leader = crud_club_member.get_leader(db, club_id=club_id)
        if current_leader and current_leader.id != member.id:
            current_leader.role = ClubMemberRole.MEMBER.value
        club = _get_club_for_update(db, club_id)
        club.leader_id = user_id

    member.role = role.value
    db.commit()
    db.refresh(member)
    return member


# ========================================
# Admin review
# ========================================


def _set_status(db: Session, club_id: int, status: ClubStatus) -> Club:
    club = _get_club_for_update(db, club_id)
    club.status = status.value
    db.commit()
    db.refresh(club)
    return club


def approve_club(db: Session, club_id: int) -> Club:
    club = _set_status(db, club_id, ClubStatus.APPROVED)
    crud_activity_log.log_activity(
        db,
        type=ActivityType.CLUB_APPROVED,
        title="Club approved",
        description=f"'{club.name}' was approved",
        user_id=club.leader_id,
        metadata={"club_id": club.id, "club_name": club.name},
        level="success",
    )
    return club


def reject_club(db: Session, club_id: int) -> Club:
    club = _set_status(db, club_id, ClubStatus.REJECTED)
    crud_activity_log.log_activity(
        db,
        type=ActivityType.CLUB_REJECTED,
        title="Club rejected",
        description=f"'{club.name}' was rejected",
        user_id=club.leader_id,
        metadata={"club_id": club.id, "club_name": club.name},
        level="warning",
    )
    return club
