from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.domains.identity.entities import User


@dataclass
class Comment:
    """Комментарий к рекомендации"""
    recommendation_id: int
    content: str
    user_id: int = 0
    created_by: Optional[User] = None
    id: int = 0
    created_at: Optional[datetime] = None
    version: int = 0

    @classmethod
    def create_comment(cls, recommendation_id: int, content: str, owner: User) -> "Comment":
        """Создание нового комментария от имени пользователя"""
        return cls(
            recommendation_id=recommendation_id,
            content=content,
            user_id=owner.id,
            created_by=owner
        )
