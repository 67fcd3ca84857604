from typing import Any, List, Mapping, Tuple

from app.db.filters import Filters, Metadata
from app.db.models.reservation import Reservation as ReservationModel
from app.db.repositories.base import VersionedRepository
from app.domains.reservations.entities import Reservation

reservations = ReservationModel.__table__


class ReservationRepository(VersionedRepository[Reservation]):
    """Репозиторий для работы с бронированиями"""

    model = ReservationModel
    fields = ("title", "description", "start_time", "end_time", "color", "parent_reservation_id")
    sort_columns = {
        "created_at": reservations.c.created_at,
        "start_time": reservations.c.start_time,
    }

    async def list_all(self, filters: Filters, created_by: str = "") -> Tuple[List[Reservation], Metadata]:
        """Постраничный список бронирований"""
        return await self._paginate(filters, [self._owned_by(created_by)])

    def _to_domain(self, data: Mapping[str, Any]) -> Reservation:
        return Reservation(
            id=data["id"],
            created_at=data["created_at"],
            user_id=data["user_id"],
            created_by=self._owner(data),
            title=data["title"],
            description=data["description"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            color=data["color"],
            parent_reservation_id=data["parent_reservation_id"],
            version=data["version"]
        )
