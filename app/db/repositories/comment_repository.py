from typing import Any, List, Mapping, Tuple

from sqlalchemy import Integer

from app.db.filters import Filters, Metadata
from app.db.models.comment import Comment as CommentModel
from app.db.predicates import unless_unset
from app.db.repositories.base import VersionedRepository
from app.domains.comments.entities import Comment

comments = CommentModel.__table__


class CommentRepository(VersionedRepository[Comment]):
    """Репозиторий для работы с комментариями"""

    model = CommentModel
    fields = ("recommendation_id", "content")
    immutable_fields = ("recommendation_id",)
    sort_columns = {
        "created_at": comments.c.created_at,
    }

    async def list_all(
        self,
        filters: Filters,
        recommendation_id: int = 0,
        created_by: str = ""
    ) -> Tuple[List[Comment], Metadata]:
        """Постраничный список комментариев"""
        predicates = [
            unless_unset(
                comments.c.recommendation_id == recommendation_id,
                recommendation_id,
                Integer,
                unset=0,
            ),
            self._owned_by(created_by),
        ]
        return await self._paginate(filters, predicates)

    async def get_for_recommendation(self, recommendation_id: int) -> List[Comment]:
        """Все комментарии рекомендации, старые первыми"""
        result = await self._execute(
            self._select()
            .where(comments.c.recommendation_id == recommendation_id)
            .order_by(comments.c.created_at.asc(), comments.c.id.asc())
        )
        return [self._to_domain(row._mapping) for row in result.all()]

    def _to_domain(self, data: Mapping[str, Any]) -> Comment:
        return Comment(
            id=data["id"],
            created_at=data["created_at"],
            recommendation_id=data["recommendation_id"],
            user_id=data["user_id"],
            created_by=self._owner(data),
            content=data["content"],
            version=data["version"]
        )
