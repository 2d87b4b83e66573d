# app/schemas/reservation.py
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.models.reservation import ReservationStatus
from app.utils.clock import to_naive_utc


class Reservation(BaseModel):
    id: int
    room_id: int
    user_id: int
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    attendees: int = 0
    team_name: Optional[str] = None
    status: ReservationStatus
    is_no_show: bool = False
    no_show_reported_at: Optional[datetime] = None
    no_show_report_count: int = 0
    check_in_at: Optional[datetime] = None
    is_late: bool = False
    created_at: datetime
    updated_at: datetime
    model_config = {"from_attributes": True}


class ReservationCreate(BaseModel):
    room_id: int
    title: str = Field(..., min_length=1, json_schema_extra={"example": "Team sync"})
    description: Optional[str] = None
    # Offsets are normalised to UTC; naive values are taken as UTC already
    start_time: datetime
    end_time: datetime
    attendees: Optional[int] = Field(default=None, ge=4, le=12)
    team_name: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalise_tz(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class ReservationUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    attendees: Optional[int] = Field(default=None, ge=4, le=12)
    team_name: Optional[str] = None
    status: Optional[ReservationStatus] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalise_tz(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class ReservationStatusUpdate(BaseModel):
    status: ReservationStatus


class ReservationDayStats(BaseModel):
    date: date
    total_reservations: int
    rooms_used: int
    total_attendees: int
