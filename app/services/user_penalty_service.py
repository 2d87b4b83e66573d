# app/services/user_penalty_service.py
"""
Administrative handling of reservation bans.

Permanent bans are never lifted automatically; an administrator clears them
here after talking to the user.
"""

import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ReservationConflictError
from app.crud import activity_log as crud_activity_log
from app.crud import user as crud_user
from app.models.activity_log import ActivityType
from app.models.user import User
from app.utils import penalties

logger = logging.getLogger(__name__)


def _get_user_for_update(db: Session, user_id: int) -> User:
    user = crud_user.get_for_update(db, user_id=user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def lift_ban(db: Session, *, user_id: int, admin_id: int) -> User:
    user = _get_user_for_update(db, user_id)
    if not user.is_reservation_banned:
        db.rollback()
        raise ReservationConflictError("User is not banned from reservations")

    previous = user.ban_status
    penalties.lift_ban(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Admin {admin_id} lifted {previous} ban of user {user.id}")
    crud_activity_log.log_activity(
        db,
        type=ActivityType.USER_BAN_LIFTED,
        title="Reservation ban lifted",
        description=f"{previous} ban of '{user.name}' lifted by admin {admin_id}",
        user_id=user.id,
        metadata={"previous_ban": previous, "admin_id": admin_id},
    )
    return user


def reset_penalties(db: Session, *, user_id: int, admin_id: int) -> User:
    user = _get_user_for_update(db, user_id)
    counts = {"no_show_count": user.no_show_count, "late_count": user.late_count}
    penalties.reset_penalties(user)
    db.commit()
    db.refresh(user)

    logger.info(f"Admin {admin_id} reset penalties of user {user.id} (was {counts})")
    crud_activity_log.log_activity(
        db,
        type=ActivityType.USER_BAN_LIFTED,
        title="Penalties reset",
        description=f"No-show and late counters of '{user.name}' were reset",
        user_id=user.id,
        metadata={"previous": counts, "admin_id": admin_id},
    )
    return user
