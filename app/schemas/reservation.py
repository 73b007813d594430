from datetime import date, datetime, time
from pydantic import BaseModel, Field
from typing import Any, Optional

from app.models.reservation import ReservationStatus


class ReservationRequest(BaseModel):
    """Body von POST/PUT: {"data": {...}}. Inhalt wird von der Pipeline geprüft."""
    data: dict[str, Any] = Field(default_factory=dict)


class ReservationRecord(BaseModel):
    """Serialisierung der DB-Zeile"""
    reservation_id: int
    first_name: str
    last_name: str
    mobile_number: str
    reservation_date: date
    reservation_time: time
    people: int
    status: ReservationStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ReservationDisplay(BaseModel):
    """Reservierung in Anzeigeform (YYYY-MM-DD, HH:MM)"""
    reservation_id: int
    first_name: str
    last_name: str
    mobile_number: str
    reservation_date: str
    reservation_time: str
    people: int
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReservationResponse(BaseModel):
    data: ReservationDisplay


class ReservationListResponse(BaseModel):
    data: list[ReservationDisplay]
