import logging
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.validator import Validator
from app.db.base import MAX_RECORD_ID
from app.db.errors import EditConflictError, RecordNotFoundError, ValidationFailedError
from app.db.filters import Filters, Metadata, validate_filters
from app.db.repositories.comment_repository import CommentRepository
from app.db.repositories.recommendation_repository import RecommendationRepository
from app.domains.comments.entities import Comment
from app.domains.comments.schemas import CommentCreate, CommentUpdate
from app.domains.comments.validators import validate_comment
from app.domains.identity.entities import User

logger = logging.getLogger(__name__)

SORT_SAFELIST = ("created_at", "-created_at")


class CommentService:
    """Сервис для работы с комментариями"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.comment_repository = CommentRepository(session)
        self.recommendation_repository = RecommendationRepository(session)

    async def create_comment(self, data: CommentCreate, owner: User) -> Comment:
        """Создание комментария к существующей рекомендации"""
        comment = Comment.create_comment(data.recommendation_id, data.content, owner)

        v = Validator()
        validate_comment(v, comment)
        if not v.valid():
            raise ValidationFailedError(v.errors)

        try:
            await self.recommendation_repository.get(comment.recommendation_id)
        except RecordNotFoundError:
            raise ValidationFailedError({"recommendation_id": "must reference an existing recommendation"})

        await self.comment_repository.insert(comment)
        logger.info(f"Comment created by {owner.username}")
        return comment

    async def update_comment(
        self,
        comment_id: int,
        update_data: CommentUpdate,
        expected_version: Optional[int] = None
    ) -> Comment:
        """Изменение текста комментария с проверкой версии"""
        comment = await self.comment_repository.get(comment_id)

        if expected_version is not None and expected_version != comment.version:
            raise EditConflictError()

        if "content" in update_data.model_fields_set:
            comment.content = update_data.content

        v = Validator()
        validate_comment(v, comment)
        if not v.valid():
            raise ValidationFailedError(v.errors)

        return await self.comment_repository.update(comment)

    async def delete_comment(self, comment_id: int) -> None:
        await self.comment_repository.delete(comment_id)

    async def list_comments(
        self,
        filters: Filters,
        recommendation_id: int = 0,
        created_by: str = ""
    ) -> Tuple[List[Comment], Metadata]:
        """Список комментариев с пагинацией"""
        v = Validator()
        validate_filters(v, filters)
        v.check(recommendation_id >= 0, "recommendation_id", "must not be negative")
        v.check(recommendation_id <= MAX_RECORD_ID, "recommendation_id", "must be a valid record id")
        if not v.valid():
            raise ValidationFailedError(v.errors)

        return await self.comment_repository.list_all(
            filters,
            recommendation_id=recommendation_id,
            created_by=created_by
        )
