from app.core.validator import HEX_COLOR_RX, Validator, byte_length, matches
from app.domains.reservations.entities import Reservation, as_utc


def validate_reservation(v: Validator, reservation: Reservation) -> None:
    v.check(reservation.user_id != 0, "created_by", "must be provided")

    v.check(reservation.title.strip() != "", "title", "must be provided")
    v.check(byte_length(reservation.title) <= 128, "title", "must not be more than 128 bytes long")

    v.check(reservation.start_time is not None, "start_time", "must be provided")
    v.check(reservation.end_time is not None, "end_time", "must be provided")
    if reservation.start_time is not None and reservation.end_time is not None:
        v.check(
            as_utc(reservation.end_time) > as_utc(reservation.start_time),
            "end_time",
            "must be after start_time",
        )

    if reservation.color is not None:
        v.check(matches(reservation.color, HEX_COLOR_RX), "color", "must be a hex color like #1DB954")

    if reservation.parent_reservation_id is not None:
        v.check(reservation.parent_reservation_id > 0, "parent_reservation_id", "must be a positive integer")
        v.check(
            reservation.parent_reservation_id != reservation.id,
            "parent_reservation_id",
            "must not reference the reservation itself",
        )
