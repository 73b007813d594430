import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Date, Integer, DateTime, Enum, String, Time

from app.database import Base


class ReservationStatus(enum.Enum):
    BOOKED = "booked"
    SEATED = "seated"
    FINISHED = "finished"
    CANCELLED = "cancelled"


# Aus diesen Status gibt es keinen Übergang mehr
TERMINAL_STATUSES = {ReservationStatus.FINISHED, ReservationStatus.CANCELLED}


class Reservation(Base):
    """
    Eine Tischreservierung.
    Wird nie gelöscht, Stornierung ist nur ein Status.
    """
    __tablename__ = "reservations"

    reservation_id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    mobile_number = Column(String(30), nullable=False, index=True)
    reservation_date = Column(Date, nullable=False, index=True)
    reservation_time = Column(Time, nullable=False)
    people = Column(Integer, nullable=False)
    status = Column(
        Enum(
            ReservationStatus,
            name="reservation_status",
            native_enum=False,
            values_callable=lambda statuses: [s.value for s in statuses]
        ),
        nullable=False,
        default=ReservationStatus.BOOKED
    )
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )
