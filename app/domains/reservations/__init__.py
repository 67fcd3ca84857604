from app.domains.reservations.entities import Reservation
from app.domains.reservations.schemas import (
    ReservationCreate, ReservationUpdate, ReservationResponse,
    ReservationEnvelope, ReservationListResponse
)

__all__ = [
    "Reservation",
    "ReservationCreate", "ReservationUpdate", "ReservationResponse",
    "ReservationEnvelope", "ReservationListResponse"
]
