import logging
from datetime import date
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.reservation import Reservation, ReservationStatus

logger = logging.getLogger("app.services.reservation_service")

# Zeichen, die bei der Telefonnummernsuche ignoriert werden
PHONE_FORMATTING_CHARS = ("(", ")", "-", " ")

# Felder, die über create/update geschrieben werden dürfen
WRITABLE_FIELDS = (
    "first_name",
    "last_name",
    "mobile_number",
    "reservation_date",
    "reservation_time",
    "people",
    "status",
)


def _strip_phone_formatting(value):
    """Entfernt Klammern, Bindestriche und Leerzeichen (SQL-Ausdruck oder str)."""
    for char in PHONE_FORMATTING_CHARS:
        if isinstance(value, str):
            value = value.replace(char, "")
        else:
            value = func.replace(value, char, "")
    return value


class ReservationService:
    """
    Datenzugriff für Reservierungen.
    Eine Instanz pro Request, lebt so lange wie die Session.
    """

    def __init__(self, db: Session):
        self.db = db

    def read(self, reservation_id: int) -> Optional[Reservation]:
        return self.db.query(Reservation).filter(
            Reservation.reservation_id == reservation_id
        ).first()

    def list(self, reservation_date: date) -> List[Reservation]:
        """Reservierungen eines Tages ohne abgeschlossene, nach Uhrzeit sortiert."""
        return self.db.query(Reservation).filter(
            Reservation.reservation_date == reservation_date,
            Reservation.status != ReservationStatus.FINISHED
        ).order_by(
            Reservation.reservation_time
        ).all()

    def search(self, mobile_number: Optional[str]) -> List[Reservation]:
        """
        Teilstring-Suche über die Telefonnummer, Formatierung wird ignoriert.
        Ohne Suchbegriff werden alle Reservierungen geliefert.
        """
        query = self.db.query(Reservation)
        if mobile_number:
            digits = _strip_phone_formatting(mobile_number)
            query = query.filter(
                _strip_phone_formatting(Reservation.mobile_number).contains(digits, autoescape=True)
            )
        return query.order_by(
            Reservation.reservation_date,
            Reservation.reservation_time
        ).all()

    def create(self, record: dict) -> Reservation:
        reservation = Reservation(**{k: v for k, v in record.items() if k in WRITABLE_FIELDS})
        self.db.add(reservation)
        self.db.commit()
        self.db.refresh(reservation)
        logger.info(f"Reservierung {reservation.reservation_id} angelegt ({reservation.reservation_date} {reservation.reservation_time})")
        return reservation

    def update(self, record: dict) -> Optional[Reservation]:
        reservation = self.read(record["reservation_id"])
        if not reservation:
            return None

        for field, value in record.items():
            if field in WRITABLE_FIELDS:
                setattr(reservation, field, value)

        self.db.commit()
        self.db.refresh(reservation)
        logger.info(f"Reservierung {reservation.reservation_id} aktualisiert")
        return reservation

    def update_status(self, reservation_id: int, status: ReservationStatus) -> Optional[Reservation]:
        reservation = self.read(reservation_id)
        if not reservation:
            return None

        old_status = reservation.status
        reservation.status = status
        self.db.commit()
        self.db.refresh(reservation)
        logger.info(f"Reservierung {reservation_id}: Status {old_status.value} -> {status.value}")
        return reservation


def get_reservation_service(db: Session = Depends(get_db)) -> ReservationService:
    return ReservationService(db)
