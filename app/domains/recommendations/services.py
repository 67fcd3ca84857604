import logging
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.validator import Validator
from app.db.errors import EditConflictError, ValidationFailedError
from app.db.filters import Filters, Metadata, validate_filters
from app.db.repositories.comment_repository import CommentRepository
from app.db.repositories.recommendation_repository import RecommendationRepository
from app.domains.identity.entities import User
from app.domains.recommendations.entities import Recommendation
from app.domains.recommendations.schemas import RecommendationCreate, RecommendationUpdate
from app.domains.recommendations.validators import validate_recommendation

logger = logging.getLogger(__name__)

SORT_SAFELIST = ("created_at", "created_by", "-created_at", "-created_by")


class RecommendationService:
    """Сервис для работы с рекомендациями"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.recommendation_repository = RecommendationRepository(session)
        self.comment_repository = CommentRepository(session)

    async def create_recommendation(self, data: RecommendationCreate, owner: User) -> Recommendation:
        """Создание новой рекомендации"""
        recommendation = Recommendation.create_recommendation(owner, **data.model_dump())
        self._validate(recommendation)

        await self.recommendation_repository.insert(recommendation)
        logger.info(f"Recommendation created by {owner.username}")
        return recommendation

    async def get_recommendation(self, recommendation_id: int) -> Recommendation:
        """Получение рекомендации вместе с комментариями"""
        recommendation = await self.recommendation_repository.get(recommendation_id)
        recommendation.comments = await self.comment_repository.get_for_recommendation(recommendation.id)
        return recommendation

    async def update_recommendation(
        self,
        recommendation_id: int,
        update_data: RecommendationUpdate,
        expected_version: Optional[int] = None
    ) -> Recommendation:
        """Частичное обновление рекомендации с проверкой версии"""
        recommendation = await self.recommendation_repository.get(recommendation_id)

        if expected_version is not None and expected_version != recommendation.version:
            raise EditConflictError()

        for name, value in update_data.changes().items():
            setattr(recommendation, name, value)

        self._validate(recommendation)
        return await self.recommendation_repository.update(recommendation)

    async def delete_recommendation(self, recommendation_id: int) -> None:
        """Удаление рекомендации"""
        await self.recommendation_repository.delete(recommendation_id)

    async def list_recommendations(
        self,
        filters: Filters,
        created_at: Optional[date] = None,
        created_by: str = "",
        title: str = "",
        include_private: bool = False
    ) -> Tuple[List[Recommendation], Metadata]:
        """Список рекомендаций с фильтрами и пагинацией"""
        v = Validator()
        validate_filters(v, filters)
        if not v.valid():
            raise ValidationFailedError(v.errors)

        return await self.recommendation_repository.list_all(
            filters,
            created_at=created_at,
            created_by=created_by,
            title=title,
            include_private=include_private
        )

    @staticmethod
    def _validate(recommendation: Recommendation) -> None:
        v = Validator()
        validate_recommendation(v, recommendation)
        if not v.valid():
            raise ValidationFailedError(v.errors)
