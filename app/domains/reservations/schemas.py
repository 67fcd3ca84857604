from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime, timezone

from app.domains.schemas import MetadataResponse, UserSummary


class ReservationCreate(BaseModel):
    """Схема для создания бронирования"""
    title: str = ""
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    color: Optional[str] = None
    parent_reservation_id: Optional[int] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, v):
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class ReservationUpdate(BaseModel):
    """Схема для обновления бронирования; применяются только переданные поля"""
    title: str = ""
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    color: Optional[str] = None
    parent_reservation_id: Optional[int] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def assume_utc(cls, v):
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def changes(self) -> dict:
        return {name: getattr(self, name) for name in self.model_fields_set}


class ReservationResponse(BaseModel):
    """Схема для ответа с данными бронирования"""
    id: int
    created_at: datetime
    created_by: UserSummary
    title: str
    description: Optional[str] = None
    start_time: datetime
    end_time: datetime
    color: Optional[str] = None
    parent_reservation_id: Optional[int] = None
    duration_minutes: int
    version: int

    model_config = ConfigDict(from_attributes=True)


class ReservationEnvelope(BaseModel):
    reservation: ReservationResponse


class ReservationListResponse(BaseModel):
    """Схема для списка бронирований"""
    reservations: List[ReservationResponse]
    metadata: MetadataResponse
