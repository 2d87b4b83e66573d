# app/utils/penalties.py
"""
Per-user penalty state machine.

A user is in exactly one ban state:

- NONE: may reserve
- TEMPORARY: may not reserve until ``ban_until``; lifted lazily on the
  next reservation attempt after that instant
- PERMANENT: may not reserve until an admin lifts the ban

Every no-show (reported, swept, or converted from three lates) goes through
``record_no_show``. It stamps a fresh 7-day ban and escalates to a permanent
ban once the no-show count reaches the threshold.

These helpers only mutate the ORM object; callers own the commit.
"""

import enum
import logging
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from app.core.config import settings
from app.core.exceptions import BanError
from app.models.user import User

logger = logging.getLogger(__name__)

NO_SHOW_BAN_DAYS = 7
PERMANENT_BAN_THRESHOLD = 3
LATE_THRESHOLD = 3


class BanState(str, enum.Enum):
    NONE = "none"
    TEMPORARY = "temporary"
    PERMANENT = "permanent"


def ban_state(user: User) -> BanState:
    return BanState(user.ban_status or BanState.NONE.value)


def _format_lift_date(ban_until: datetime) -> str:
    tz = ZoneInfo(settings.BAN_DISPLAY_TIMEZONE)
    return ban_until.replace(tzinfo=ZoneInfo("UTC")).astimezone(tz).date().isoformat()


def ensure_can_reserve(user: User, now: datetime) -> None:
    """
    Raise BanError while the user is banned.

    An expired temporary ban is cleared on the user object as a side effect.
    """
    state = ban_state(user)

    if state is BanState.PERMANENT:
        raise BanError(
            f"Reservations are permanently suspended after {PERMANENT_BAN_THRESHOLD} "
            "no-shows. Contact an administrator to have the ban reviewed.",
            permanent=True,
        )

    if state is BanState.TEMPORARY:
        if user.ban_until is not None and user.ban_until > now:
            raise BanError(
                f"Reservations are suspended until {_format_lift_date(user.ban_until)}",
                ban_until=user.ban_until,
            )
        lift_ban(user)
        logger.info(f"Temporary ban expired for user {user.id}, lifted")


def _impose_ban(user: User, now: datetime) -> None:
    if user.no_show_count >= PERMANENT_BAN_THRESHOLD:
        user.ban_status = BanState.PERMANENT.value
        user.ban_until = None
    else:
        user.ban_status = BanState.TEMPORARY.value
        user.ban_until = now + timedelta(days=NO_SHOW_BAN_DAYS)


def record_no_show(user: User, now: datetime) -> None:
    user.no_show_count += 1
    user.last_no_show_at = now
    _impose_ban(user, now)
    logger.info(
        f"User {user.id} no-show count: {user.no_show_count}, "
        f"banned until: {user.ban_until or 'permanent'}"
    )


def record_late(user: User, now: datetime) -> bool:
    """
    Count one late check-in. Returns True when the lates converted into a no-show.
    """
    user.late_count += 1
    logger.info(f"User {user.id} late count: {user.late_count}")

    if user.late_count < LATE_THRESHOLD:
        return False

    user.late_count = 0
    record_no_show(user, now)
    return True


def lift_ban(user: User) -> None:
    user.ban_status = BanState.NONE.value
    user.ban_until = None


def reset_penalties(user: User) -> None:
    """Admin reset: clear the ban and both counters."""
    lift_ban(user)
    user.no_show_count = 0
    user.late_count = 0
    user.last_no_show_at = None
