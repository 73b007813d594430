from app.models.reservation import Reservation, ReservationStatus
