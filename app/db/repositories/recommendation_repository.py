from datetime import date
from typing import Any, List, Mapping, Optional, Tuple

from sqlalchemy import Boolean, Date, String, func, literal, or_

from app.db.filters import Filters, Metadata
from app.db.models.recommendation import Recommendation as RecommendationModel
from app.db.predicates import text_search, unless_unset
from app.db.repositories.base import VersionedRepository, users
from app.domains.recommendations.entities import Recommendation

recommendations = RecommendationModel.__table__


class RecommendationRepository(VersionedRepository[Recommendation]):
    """Репозиторий для работы с рекомендациями"""

    model = RecommendationModel
    fields = ("artist", "title", "cover_url", "yt_link", "spotify_link", "comment", "is_public")
    sort_columns = {
        "created_at": recommendations.c.created_at,
        "created_by": users.c.username,
    }

    async def list_all(
        self,
        filters: Filters,
        created_at: Optional[date] = None,
        created_by: str = "",
        title: str = "",
        include_private: bool = False
    ) -> Tuple[List[Recommendation], Metadata]:
        """Постраничный список рекомендаций с необязательными фильтрами"""
        predicates = [
            unless_unset(
                func.date(recommendations.c.created_at, type_=Date) == literal(created_at, Date),
                created_at,
                Date,
            ),
            self._owned_by(created_by),
            unless_unset(
                text_search(recommendations.c.title, literal(title, String)),
                title,
                String,
                unset="",
            ),
            # Приватные рекомендации видны только с правом записи
            or_(literal(include_private, Boolean), recommendations.c.is_public.is_(True)),
        ]
        return await self._paginate(filters, predicates)

    def _to_domain(self, data: Mapping[str, Any]) -> Recommendation:
        """Преобразование строки БД в доменную сущность"""
        return Recommendation(
            id=data["id"],
            created_at=data["created_at"],
            user_id=data["user_id"],
            created_by=self._owner(data),
            artist=data["artist"],
            title=data["title"],
            cover_url=data["cover_url"],
            yt_link=data["yt_link"],
            spotify_link=data["spotify_link"],
            comment=data["comment"],
            is_public=data["is_public"],
            version=data["version"]
        )
