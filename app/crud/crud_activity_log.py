# app/crud/crud_activity_log.py
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from app.models.activity_log import ActivityLog, ActivityType

logger = logging.getLogger(__name__)


class CRUDActivityLog:
    """
    Append-only admin activity feed.

    Logging an activity must never break the operation that triggered it,
    so ``log_activity`` commits on its own and swallows storage errors
    after logging them.
    """

    def __init__(self, model=ActivityLog):
        self.model = model

    def log_activity(
        self,
        db: Session,
        *,
        type: ActivityType,
        title: str,
        description: Optional[str] = None,
        user_id: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
        level: str = "info",
    ) -> Optional[ActivityLog]:
        entry = self.model(
            type=type.value,
            title=title,
            description=description,
            user_id=user_id,
            event_data=metadata or {},
            level=level,
        )
        try:
            db.add(entry)
            db.commit()
            db.refresh(entry)
            return entry
        except Exception as e:
            db.rollback()
            logger.error(f"Failed to record {type.value} activity: {e}")
            return None

    def get_recent(self, db: Session, *, limit: int = 20) -> List[ActivityLog]:
        return (
            db.query(self.model)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .limit(limit)
            .all()
        )


activity_log = CRUDActivityLog()
