# app/background_tasks/reservation_tasks.py
"""
Background tasks for the reservation lifecycle.

Scheduled by app.scheduler:
- finish_elapsed_reservations(): every hour, on the hour
- mark_overdue_no_shows(): every 5 minutes

Each run opens its own session, so the two jobs share no in-process state
and can overlap with interactive requests.
"""

import logging

from app.db.session import SessionLocal
from app.services.reservation_lifecycle import reservation_service

logger = logging.getLogger(__name__)


def finish_elapsed_reservations() -> int:
    """
    Background task: move confirmed reservations whose end time has passed
    to 'finished'.

    Returns: Number of reservations finished
    """
    db = SessionLocal()
    try:
        count = reservation_service.finish_elapsed_reservations(db)

        if count > 0:
            logger.info(f"Updated {count} reservations to finished status")

        return count

    except Exception as e:
        logger.error(f"Error in finish_elapsed_reservations task: {str(e)}")
        db.rollback()
        return 0

    finally:
        db.close()


def mark_overdue_no_shows() -> int:
    """
    Background task: apply the no-show penalty to confirmed reservations that
    started more than 30 minutes ago without a check-in.

    Returns: Number of reservations marked as no-show
    """
    db = SessionLocal()
    try:
        count = reservation_service.mark_overdue_no_shows(db)

        if count > 0:
            logger.info(f"Marked {count} reservations as no-show")
        else:
            logger.debug("No overdue reservations found")

        return count

    except Exception as e:
        logger.error(f"Error in mark_overdue_no_shows task: {str(e)}")
        db.rollback()
        return 0

    finally:
        db.close()
