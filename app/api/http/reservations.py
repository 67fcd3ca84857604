from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http.params import edit_conflict, expected_version, filters_dependency, not_found, parse_id
from app.core.auth import require_permission
from app.core.db import get_db
from app.db.errors import EditConflictError, RecordNotFoundError
from app.db.filters import Filters
from app.domains.identity.entities import User
from app.domains.reservations.schemas import (
    ReservationCreate, ReservationUpdate, ReservationResponse,
    ReservationEnvelope, ReservationListResponse
)
from app.domains.reservations.services import SORT_SAFELIST, ReservationService
from app.domains.schemas import MessageResponse, MetadataResponse

router = APIRouter(prefix="/v1/reservations", tags=["reservations"])


@router.get("", response_model=ReservationListResponse)
async def list_reservations(
    filters: Filters = Depends(filters_dependency(SORT_SAFELIST)),
    created_by: str = Query(""),
    current_user: User = Depends(require_permission("reservations:read")),
    db: AsyncSession = Depends(get_db)
):
    """Список бронирований"""
    reservation_service = ReservationService(db)
    reservations, metadata = await reservation_service.list_reservations(filters, created_by=created_by)

    return ReservationListResponse(
        reservations=[ReservationResponse.model_validate(r) for r in reservations],
        metadata=MetadataResponse.model_validate(metadata)
    )


@router.post("", response_model=ReservationEnvelope, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    reservation_data: ReservationCreate,
    response: Response,
    current_user: User = Depends(require_permission("reservations:write")),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового бронирования"""
    reservation_service = ReservationService(db)
    reservation = await reservation_service.create_reservation(reservation_data, current_user)

    response.headers["Location"] = f"/v1/reservations/{reservation.id}"
    return ReservationEnvelope(reservation=ReservationResponse.model_validate(reservation))


@router.get("/{reservation_id}", response_model=ReservationEnvelope)
async def get_reservation(
    reservation_id: str,
    current_user: User = Depends(require_permission("reservations:read")),
    db: AsyncSession = Depends(get_db)
):
    record_id = parse_id(reservation_id)
    reservation_service = ReservationService(db)

    try:
        reservation = await reservation_service.get_reservation(record_id)
    except RecordNotFoundError:
        raise not_found()

    return ReservationEnvelope(reservation=ReservationResponse.model_validate(reservation))


@router.patch("/{reservation_id}", response_model=ReservationEnvelope)
async def update_reservation(
    reservation_id: str,
    update_data: ReservationUpdate,
    version: Optional[int] = Depends(expected_version),
    current_user: User = Depends(require_permission("reservations:write")),
    db: AsyncSession = Depends(get_db)
):
    """Частичное обновление бронирования"""
    record_id = parse_id(reservation_id)
    reservation_service = ReservationService(db)

    try:
        reservation = await reservation_service.update_reservation(record_id, update_data, version)
    except RecordNotFoundError:
        raise not_found()
    except EditConflictError:
        raise edit_conflict()

    return ReservationEnvelope(reservation=ReservationResponse.model_validate(reservation))


@router.delete("/{reservation_id}", response_model=MessageResponse)
async def delete_reservation(
    reservation_id: str,
    current_user: User = Depends(require_permission("reservations:write")),
    db: AsyncSession = Depends(get_db)
):
    record_id = parse_id(reservation_id)
    reservation_service = ReservationService(db)

    try:
        await reservation_service.delete_reservation(record_id)
    except RecordNotFoundError:
        raise not_found()

    return MessageResponse(message="reservation successfully deleted")
