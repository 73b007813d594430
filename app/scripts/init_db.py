import argparse
import sys
import traceback
from datetime import date, time, timedelta

from app.database import Base, SessionLocal, engine
from app.models import Reservation
from app.services.reservation_service import ReservationService
from app.config import settings
from app.utils.logging_config import setup_logging

logger = setup_logging(log_to_file=settings.log_to_file)

SAMPLE_GUESTS = [
    ("Rick", "Sanchez", "202-555-0164", time(20, 0), 6),
    ("Frank", "Palicky", "202-555-0153", time(12, 30), 1),
    ("Bird", "Person", "808-555-0141", time(14, 0), 1),
    ("Tiger", "Lion", "808-555-0140", time(18, 0), 3),
]


def _next_open_day(start: date) -> date:
    day = start
    while day.weekday() == settings.closed_weekday:
        day += timedelta(days=1)
    return day


def seed(db) -> int:
    service = ReservationService(db)
    reservation_date = _next_open_day(date.today() + timedelta(days=1))
    for first_name, last_name, mobile_number, reservation_time, people in SAMPLE_GUESTS:
        service.create({
            "first_name": first_name,
            "last_name": last_name,
            "mobile_number": mobile_number,
            "reservation_date": reservation_date,
            "reservation_time": reservation_time,
            "people": people,
        })
    return len(SAMPLE_GUESTS)


def main(argv=None) -> int:
    """
    Legt die Tabellen an, optional mit Beispieldaten.
    Gibt Exit-Code zurück: 0 = Erfolg, 1 = Fehler
    """
    parser = argparse.ArgumentParser(description="Reservierungs-Datenbank anlegen")
    parser.add_argument("--seed", action="store_true", help="Beispielreservierungen einfügen")
    args = parser.parse_args(argv)

    logger.info("Lege Tabellen an")
    Base.metadata.create_all(bind=engine)

    if not args.seed:
        return 0

    db = SessionLocal()
    try:
        if db.query(Reservation).count():
            logger.info("Tabelle enthält bereits Reservierungen, Seed übersprungen")
            return 0
        created = seed(db)
        logger.info(f"{created} Beispielreservierungen angelegt")
        return 0
    except Exception as e:
        logger.error(f"Seed fehlgeschlagen: {e}")
        logger.error(traceback.format_exc())
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
