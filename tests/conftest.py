"""
Pytest Fixtures für die Reservierungs-API.

Die App läuft gegen eine In-Memory-SQLite-Datenbank.
Tabellen werden für jeden Test neu angelegt.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from datetime import date, time, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base, get_db
from app.models import Reservation, ReservationStatus


# ============ DATENBANK SETUP ============

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ============ DATUMS-HELFER ============

TUESDAY = 1


def future_open_date(days_ahead: int = 30) -> date:
    """Datum in der Zukunft, das kein Ruhetag ist"""
    day = date.today() + timedelta(days=days_ahead)
    while day.weekday() == TUESDAY:
        day += timedelta(days=1)
    return day


def future_tuesday() -> date:
    day = date.today() + timedelta(days=7)
    while day.weekday() != TUESDAY:
        day += timedelta(days=1)
    return day


# ============ BASIS FIXTURES ============

@pytest.fixture(scope="function")
def db():
    """Frische Datenbank für jeden Test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db):
    """
    FastAPI TestClient mit überschriebener Datenbank.
    """
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============ RESERVIERUNGS FIXTURES ============

@pytest.fixture
def reservation_payload():
    """Gültiger Body-Inhalt für POST/PUT"""
    return {
        "first_name": "Rick",
        "last_name": "Sanchez",
        "mobile_number": "202-555-0164",
        "reservation_date": future_open_date().isoformat(),
        "reservation_time": "18:00",
        "people": 2,
    }


@pytest.fixture
def make_reservation(db):
    """Factory: legt eine Reservierung direkt in der DB an"""
    def _make(**overrides):
        values = {
            "first_name": "Frank",
            "last_name": "Palicky",
            "mobile_number": "202-555-0153",
            "reservation_date": future_open_date(),
            "reservation_time": time(12, 30),
            "people": 1,
            "status": ReservationStatus.BOOKED,
        }
        values.update(overrides)
        reservation = Reservation(**values)
        db.add(reservation)
        db.commit()
        db.refresh(reservation)
        return reservation
    return _make


@pytest.fixture
def booked_reservation(make_reservation):
    return make_reservation()


@pytest.fixture
def finished_reservation(make_reservation):
    return make_reservation(status=ReservationStatus.FINISHED)
