from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional


@dataclass
class User:
    """Сущность пользователя домена Identity"""
    id: int
    name: str
    username: str
    email: str = ""
    activated: bool = False
    created_at: Optional[datetime] = None
    version: int = 0

    def __repr__(self) -> str:
        return f"User(id={self.id}, username={self.username})"


class Permissions(list):
    """Набор кодов разрешений пользователя"""

    def __init__(self, codes: Iterable[str] = ()):
        super().__init__(codes)

    def include(self, code: str) -> bool:
        return code in self
