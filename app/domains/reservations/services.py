import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.validator import Validator
from app.db.errors import EditConflictError, RecordNotFoundError, ValidationFailedError
from app.db.filters import Filters, Metadata, validate_filters
from app.db.repositories.reservation_repository import ReservationRepository
from app.domains.identity.entities import User
from app.domains.reservations.entities import Reservation
from app.domains.reservations.schemas import ReservationCreate, ReservationUpdate
from app.domains.reservations.validators import validate_reservation

logger = logging.getLogger(__name__)

SORT_SAFELIST = ("created_at", "start_time", "-created_at", "-start_time")


class ReservationService:
    """Сервис для работы с бронированиями"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.reservation_repository = ReservationRepository(session)

    async def create_reservation(self, data: ReservationCreate, owner: User) -> Reservation:
        """Создание нового бронирования"""
        reservation = Reservation.create_reservation(owner, **data.model_dump())
        self._validate(reservation)
        await self._check_parent(reservation)

        await self.reservation_repository.insert(reservation)
        logger.info(f"Reservation created by {owner.username}")
        return reservation

    async def get_reservation(self, reservation_id: int) -> Reservation:
        return await self.reservation_repository.get(reservation_id)

    async def update_reservation(
        self,
        reservation_id: int,
        update_data: ReservationUpdate,
        expected_version: Optional[int] = None
    ) -> Reservation:
        """Частичное обновление бронирования с проверкой версии"""
        reservation = await self.reservation_repository.get(reservation_id)

        if expected_version is not None and expected_version != reservation.version:
            raise EditConflictError()

        for name, value in update_data.changes().items():
            setattr(reservation, name, value)

        self._validate(reservation)
        await self._check_parent(reservation)
        return await self.reservation_repository.update(reservation)

    async def delete_reservation(self, reservation_id: int) -> None:
        await self.reservation_repository.delete(reservation_id)

    async def list_reservations(
        self,
        filters: Filters,
        created_by: str = ""
    ) -> Tuple[List[Reservation], Metadata]:
        """Список бронирований с пагинацией"""
        v = Validator()
        validate_filters(v, filters)
        if not v.valid():
            raise ValidationFailedError(v.errors)

        return await self.reservation_repository.list_all(filters, created_by=created_by)

    async def _check_parent(self, reservation: Reservation) -> None:
        """Родительское бронирование, если указано, должно существовать"""
        if reservation.parent_reservation_id is None:
            return
        try:
            await self.reservation_repository.get(reservation.parent_reservation_id)
        except RecordNotFoundError:
            raise ValidationFailedError({"parent_reservation_id": "must reference an existing reservation"})

    @staticmethod
    def _validate(reservation: Reservation) -> None:
        v = Validator()
        validate_reservation(v, reservation)
        if not v.valid():
            raise ValidationFailedError(v.errors)
