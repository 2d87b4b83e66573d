# app/api/v1/endpoints/admin.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api import deps
from app.crud import activity_log as crud_activity_log
from app.db.session import get_db
from app.models.user import User
from app.scheduler import get_scheduler_status
from app.schemas.activity_log import ActivityLog as ActivityLogSchema

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/activities/recent", response_model=List[ActivityLogSchema])
def recent_activities(
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_admin),
):
    return crud_activity_log.get_recent(db, limit=limit)


@router.get("/scheduler")
def scheduler_status(current_user: User = Depends(deps.get_current_admin)):
    """Next run time of the reservation sweeps."""
    return get_scheduler_status()
