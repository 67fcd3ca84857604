from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from app.domains.identity.entities import User


def as_utc(moment: datetime) -> datetime:
    # Время без зоны считается UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass
class Reservation:
    """Сущность бронирования времени в календаре"""
    title: str
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    user_id: int = 0
    created_by: Optional[User] = None
    description: Optional[str] = None
    color: Optional[str] = None
    parent_reservation_id: Optional[int] = None
    id: int = 0
    created_at: Optional[datetime] = None
    version: int = 0

    @classmethod
    def create_reservation(cls, owner: User, **values) -> "Reservation":
        """Создание нового бронирования от имени пользователя"""
        return cls(user_id=owner.id, created_by=owner, **values)

    @property
    def duration_minutes(self) -> int:
        if not self.start_time or not self.end_time:
            return 0
        return int((as_utc(self.end_time) - as_utc(self.start_time)).total_seconds() // 60)

    def __repr__(self) -> str:
        return f"Reservation(id={self.id}, title={self.title}, version={self.version})"
