import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.models.reservation import Reservation
from app.schemas.reservation import (
    ReservationRequest,
    ReservationRecord,
    ReservationResponse,
    ReservationListResponse
)
from app.services.reservation_service import ReservationService, get_reservation_service
from app.services.reservation_validation import (
    to_local_time,
    validate_create,
    validate_read,
    validate_update,
    validate_update_status
)

logger = logging.getLogger("app.routers.reservations")

router = APIRouter(prefix="/reservations", tags=["reservations"])


def _display(reservation: Reservation) -> dict:
    record = ReservationRecord.model_validate(reservation).model_dump(mode="json")
    return to_local_time(record)


def _payload(body: Optional[ReservationRequest]) -> dict:
    return body.data if body else {}


@router.get("", response_model=ReservationListResponse)
def list_reservations(
    date: Optional[date] = Query(default=None),
    mobile_number: Optional[str] = Query(default=None),
    service: ReservationService = Depends(get_reservation_service)
):
    """
    Mit ?date= alle offenen Reservierungen des Tages,
    sonst Suche über ?mobile_number=
    """
    if date:
        reservations = service.list(date)
    else:
        reservations = service.search(mobile_number)

    return {"data": [_display(r) for r in reservations]}


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
def create_reservation(
    body: Optional[ReservationRequest] = None,
    service: ReservationService = Depends(get_reservation_service)
):
    context = validate_create(_payload(body))
    reservation = service.create(context.record())
    return {"data": _display(reservation)}


@router.get("/{reservation_id}", response_model=ReservationResponse)
def read_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service)
):
    context = validate_read(reservation_id, service)
    return {"data": _display(context.reservation)}


@router.put("/{reservation_id}", response_model=ReservationResponse)
def update_reservation(
    reservation_id: str,
    body: Optional[ReservationRequest] = None,
    service: ReservationService = Depends(get_reservation_service)
):
    context = validate_update(_payload(body), reservation_id, service)

    # ID kommt immer aus der geladenen Reservierung, nicht aus dem Body
    record = {
        **context.record(),
        "reservation_id": context.reservation.reservation_id
    }
    reservation = service.update(record)
    return {"data": _display(reservation)}


@router.put("/{reservation_id}/status", response_model=ReservationResponse)
def update_reservation_status(
    reservation_id: str,
    body: Optional[ReservationRequest] = None,
    service: ReservationService = Depends(get_reservation_service)
):
    context = validate_update_status(_payload(body), reservation_id, service)
    reservation = service.update_status(context.reservation.reservation_id, context.status)
    return {"data": _display(reservation)}
