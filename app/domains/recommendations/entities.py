from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from app.domains.comments.entities import Comment
from app.domains.identity.entities import User


@dataclass
class Recommendation:
    """Сущность музыкальной рекомендации.

    Необязательные поля хранят None, если значение не передавалось,
    и пустую строку, если его явно очистили.
    """
    artist: str
    title: str
    user_id: int = 0
    created_by: Optional[User] = None
    cover_url: Optional[str] = None
    yt_link: Optional[str] = None
    spotify_link: Optional[str] = None
    comment: Optional[str] = None
    is_public: bool = False
    id: int = 0
    created_at: Optional[datetime] = None
    version: int = 0
    comments: List[Comment] = field(default_factory=list)

    @classmethod
    def create_recommendation(cls, owner: User, **values) -> "Recommendation":
        """Создание новой рекомендации от имени пользователя"""
        return cls(user_id=owner.id, created_by=owner, **values)

    def has_link(self) -> bool:
        return bool(self.yt_link) or bool(self.spotify_link)

    def __repr__(self) -> str:
        return f"Recommendation(id={self.id}, title={self.title}, version={self.version})"
