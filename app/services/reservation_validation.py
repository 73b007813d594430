"""
Validierung für Reservierungs-Requests.

Jeder Endpoint hat eine feste Reihenfolge von Prüfschritten. Ein Schritt
bekommt den ReservationContext und gibt None (ok) oder einen ApiError zurück.
Der erste Fehler beendet die Pipeline und wird vom Orchestrator geworfen.
"""
import logging
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any, Callable, Iterable, Optional
from zoneinfo import ZoneInfo

from app.config import settings
from app.errors import ApiError, NotFoundError, ValidationError
from app.models.reservation import Reservation, ReservationStatus, TERMINAL_STATUSES
from app.services.reservation_service import ReservationService

logger = logging.getLogger("app.services.reservation_validation")

VALID_PROPERTIES = (
    "first_name",
    "last_name",
    "mobile_number",
    "reservation_date",
    "reservation_time",
    "people",
    "status",
    "reservation_id",
    "created_at",
    "updated_at",
)

REQUIRED_PROPERTIES = (
    "first_name",
    "last_name",
    "mobile_number",
    "reservation_date",
    "reservation_time",
    "people",
)

TEXT_PROPERTIES = ("first_name", "last_name", "mobile_number")

# Obergrenze einer INTEGER-Spalte (reservation_id, people)
MAX_INTEGER = 2**31 - 1

# Unabhängig von der Locale, die Fehlermeldungen sind englisch
DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

STATUS_VALUES = [s.value for s in ReservationStatus]

DATE_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2})(T.*)?$")
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")


@dataclass
class ReservationContext:
    """Sammelt alles, was die Schritte eines Requests herausfinden."""
    data: dict
    reservation_id: Any = None
    reservation: Optional[Reservation] = None
    status: Optional[ReservationStatus] = None
    reservation_date: Optional[date] = None
    reservation_time: Optional[time] = None
    people: Optional[int] = None

    def record(self) -> dict:
        """Geprüfte Werte in der Form, die der ReservationService schreibt."""
        record = {
            field: str(self.data[field])
            for field in TEXT_PROPERTIES
            if self.data.get(field) is not None
        }
        if self.reservation_date is not None:
            record["reservation_date"] = self.reservation_date
        if self.reservation_time is not None:
            record["reservation_time"] = self.reservation_time
        if self.people is not None:
            record["people"] = self.people
        if self.status is not None:
            record["status"] = self.status
        return record


Step = Callable[[ReservationContext], Optional[ApiError]]


# ============ HILFSFUNKTIONEN ============

def _restaurant_tz() -> ZoneInfo:
    return ZoneInfo(settings.restaurant_timezone)


def _now() -> datetime:
    return datetime.now(_restaurant_tz())


def parse_date(value) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    match = DATE_PATTERN.match(value.strip())
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


def parse_time(value) -> Optional[time]:
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        return None
    match = TIME_PATTERN.match(value.strip())
    if not match:
        return None
    hours, minutes, seconds = match.groups()
    try:
        return time(int(hours), int(minutes), int(seconds or 0))
    except ValueError:
        return None


def _parse_id(value) -> Optional[int]:
    """Nur positive Ganzzahlen, die in die INTEGER-Spalte passen, sonst None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.isascii() and value.isdecimal():
        value = int(value)
    if isinstance(value, int) and 0 < value <= MAX_INTEGER:
        return value
    return None


def _format_12h(value: time) -> str:
    """10:30 -> '10:30AM', 21:30 -> '9:30PM'"""
    hour = value.hour % 12 or 12
    suffix = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d}{suffix}"


def _closed_day_name() -> str:
    return DAY_NAMES[settings.closed_weekday]


# ============ PROPERTY-VALIDATOREN ============

def has_only_valid_properties(context: ReservationContext) -> Optional[ApiError]:
    invalid_fields = [field for field in context.data if field not in VALID_PROPERTIES]
    if invalid_fields:
        return ValidationError(f"Invalid field(s): {', '.join(invalid_fields)}")
    return None


def has_properties(*properties: str) -> Step:
    """Baut einen Schritt, der die Anwesenheit der Felder prüft (None und "" zählen als fehlend)."""
    def check(context: ReservationContext) -> Optional[ApiError]:
        for prop in properties:
            value = context.data.get(prop)
            if value is None or value == "":
                return ValidationError(f"A '{prop}' property is required.")
        return None
    return check


has_required_properties = has_properties(*REQUIRED_PROPERTIES)


def has_valid_lengths(context: ReservationContext) -> Optional[ApiError]:
    """Textfelder dürfen nicht länger sein als ihre Spalte."""
    for field in TEXT_PROPERTIES:
        value = context.data.get(field)
        max_length = Reservation.__table__.c[field].type.length
        if value is not None and max_length and len(str(value)) > max_length:
            return ValidationError(f"'{field}' must be at most {max_length} characters")
    return None


# ============ GESCHÄFTSREGELN ============

def has_valid_date(context: ReservationContext) -> Optional[ApiError]:
    reservation_date = parse_date(context.data.get("reservation_date"))
    if reservation_date is None:
        return ValidationError("Invalid reservation_date")

    # Wochentag des Kalenderdatums (UTC), unabhängig von der Restaurant-Zeitzone
    if reservation_date.weekday() == settings.closed_weekday:
        return ValidationError(f"Restaurant is closed on {_closed_day_name()}s")

    # Ungültige Uhrzeit meldet has_valid_time
    reservation_time = parse_time(context.data.get("reservation_time"))
    if reservation_time is not None:
        starts_at = datetime.combine(reservation_date, reservation_time, tzinfo=_restaurant_tz())
        if starts_at <= _now():
            return ValidationError("Reservation must be in the future")

    context.reservation_date = reservation_date
    return None


def has_valid_time(context: ReservationContext) -> Optional[ApiError]:
    reservation_time = parse_time(context.data.get("reservation_time"))
    if reservation_time is None:
        return ValidationError("Invalid reservation_time")

    # Sekunden werden bei den Öffnungszeiten ignoriert
    hours_minutes = (reservation_time.hour, reservation_time.minute)
    opening = parse_time(settings.opening_time)
    closing = parse_time(settings.closing_time)

    if hours_minutes < (opening.hour, opening.minute):
        return ValidationError(f"Reservation must be after {_format_12h(opening)}")
    if hours_minutes > (closing.hour, closing.minute):
        return ValidationError(f"Reservation must be before {_format_12h(closing)}")

    context.reservation_time = reservation_time
    return None


def has_valid_number(context: ReservationContext) -> Optional[ApiError]:
    people = context.data.get("people")
    # 2.0 aus JSON ist eine ganze Zahl, 2.5 nicht
    if isinstance(people, float) and people.is_integer():
        people = int(people)
    if isinstance(people, bool) or not isinstance(people, int):
        return ValidationError("Invalid number of people")
    if people <= 0 or people > MAX_INTEGER:
        return ValidationError("Invalid number of people")

    context.people = people
    return None


def has_valid_status(context: ReservationContext) -> Optional[ApiError]:
    status = context.data.get("status")
    current_status = context.reservation.status

    if current_status in TERMINAL_STATUSES:
        return ValidationError(f"Reservation status is {current_status.value}")
    if status not in STATUS_VALUES:
        return ValidationError(f"Invalid status: {status}")

    context.status = ReservationStatus(status)
    return None


def is_booked(context: ReservationContext) -> Optional[ApiError]:
    status = context.data.get("status")
    if status and status != ReservationStatus.BOOKED.value:
        return ValidationError(f"Invalid status: {status}")
    return None


def is_editable(context: ReservationContext) -> Optional[ApiError]:
    current_status = context.reservation.status
    if current_status in TERMINAL_STATUSES:
        return ValidationError(f"Reservation status is {current_status.value}")
    return None


# ============ EXISTENZ ============

def reservation_exists(service: ReservationService) -> Step:
    """Lädt die Reservierung (Route-Parameter, sonst data.reservation_id) in den Kontext."""
    def check(context: ReservationContext) -> Optional[ApiError]:
        reservation_id = context.reservation_id
        if reservation_id is None:
            reservation_id = context.data.get("reservation_id")

        parsed_id = _parse_id(reservation_id)
        reservation = service.read(parsed_id) if parsed_id is not None else None
        if reservation:
            context.reservation = reservation
            return None
        return NotFoundError(f"Reservation {reservation_id} cannot be found.")
    return check


# ============ ANZEIGE ============

def to_local_time(record: dict) -> dict:
    """
    Bringt Datum und Uhrzeit einer serialisierten Reservierung in Anzeigeform:
    reservation_date -> "YYYY-MM-DD", reservation_time -> "HH:MM" (24h).
    Ändert das übergebene dict und gibt es zurück.
    """
    value = record.get("reservation_date")
    if isinstance(value, datetime) and value.tzinfo is not None:
        value = value.astimezone(_restaurant_tz())
    reservation_date = parse_date(value)
    if reservation_date is not None:
        record["reservation_date"] = reservation_date.isoformat()

    reservation_time = parse_time(record.get("reservation_time"))
    if reservation_time is not None:
        record["reservation_time"] = f"{reservation_time.hour:02d}:{reservation_time.minute:02d}"

    return record


# ============ PIPELINES ============

def run_pipeline(context: ReservationContext, steps: Iterable[Step]) -> Optional[ApiError]:
    """Führt die Schritte der Reihe nach aus, liefert den ersten Fehler oder None."""
    for step in steps:
        error = step(context)
        if error is not None:
            return error
    return None


def _validate(context: ReservationContext, steps: Iterable[Step]) -> ReservationContext:
    error = run_pipeline(context, steps)
    if error is not None:
        logger.debug(f"Validierung fehlgeschlagen ({error.status}): {error.message}")
        raise error
    return context


RECORD_STEPS = (
    has_only_valid_properties,
    has_required_properties,
    has_valid_lengths,
    has_valid_date,
    has_valid_time,
    has_valid_number,
)


def validate_create(data: dict) -> ReservationContext:
    context = ReservationContext(data=data)
    _validate(context, (*RECORD_STEPS, is_booked))
    context.status = ReservationStatus.BOOKED
    return context


def validate_read(reservation_id, service: ReservationService) -> ReservationContext:
    context = ReservationContext(data={}, reservation_id=reservation_id)
    return _validate(context, (reservation_exists(service),))


def validate_update(data: dict, reservation_id, service: ReservationService) -> ReservationContext:
    context = ReservationContext(data=data, reservation_id=reservation_id)
    return _validate(context, (*RECORD_STEPS, reservation_exists(service), is_booked, is_editable))


def validate_update_status(data: dict, reservation_id, service: ReservationService) -> ReservationContext:
    context = ReservationContext(data=data, reservation_id=reservation_id)
    return _validate(context, (reservation_exists(service), has_valid_status))
