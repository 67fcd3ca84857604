from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http.params import edit_conflict, expected_version, filters_dependency, not_found, parse_id
from app.core.auth import get_current_permissions, require_permission
from app.core.db import get_db
from app.db.errors import EditConflictError, RecordNotFoundError
from app.db.filters import Filters
from app.domains.identity.entities import Permissions, User
from app.domains.recommendations.schemas import (
    RecommendationCreate, RecommendationUpdate, RecommendationResponse,
    RecommendationDetailResponse, RecommendationEnvelope, RecommendationDetailEnvelope,
    RecommendationListResponse
)
from app.domains.recommendations.services import SORT_SAFELIST, RecommendationService
from app.domains.schemas import MessageResponse, MetadataResponse

router = APIRouter(prefix="/v1/recommendations", tags=["recommendations"])


@router.get("", response_model=RecommendationListResponse)
async def list_recommendations(
    filters: Filters = Depends(filters_dependency(SORT_SAFELIST)),
    created_at: Optional[date] = Query(None),
    created_by: str = Query(""),
    title: str = Query(""),
    permissions: Permissions = Depends(get_current_permissions),
    db: AsyncSession = Depends(get_db)
):
    """Список рекомендаций; приватные видны только пользователям с правом записи"""
    recommendation_service = RecommendationService(db)

    recommendations, metadata = await recommendation_service.list_recommendations(
        filters,
        created_at=created_at,
        created_by=created_by,
        title=title,
        include_private=permissions.include("recommendations:write")
    )

    return RecommendationListResponse(
        recommendations=[RecommendationResponse.model_validate(r) for r in recommendations],
        metadata=MetadataResponse.model_validate(metadata)
    )


@router.post("", response_model=RecommendationEnvelope, status_code=status.HTTP_201_CREATED)
async def create_recommendation(
    recommendation_data: RecommendationCreate,
    response: Response,
    current_user: User = Depends(require_permission("recommendations:write")),
    db: AsyncSession = Depends(get_db)
):
    """Создание новой рекомендации"""
    recommendation_service = RecommendationService(db)
    recommendation = await recommendation_service.create_recommendation(recommendation_data, current_user)

    response.headers["Location"] = f"/v1/recommendations/{recommendation.id}"
    return RecommendationEnvelope(recommendation=RecommendationResponse.model_validate(recommendation))


@router.get("/{recommendation_id}", response_model=RecommendationDetailEnvelope)
async def get_recommendation(
    recommendation_id: str,
    current_user: User = Depends(require_permission("recommendations:read")),
    db: AsyncSession = Depends(get_db)
):
    """Получение рекомендации вместе с комментариями"""
    record_id = parse_id(recommendation_id)
    recommendation_service = RecommendationService(db)

    try:
        recommendation = await recommendation_service.get_recommendation(record_id)
    except RecordNotFoundError:
        raise not_found()

    return RecommendationDetailEnvelope(
        recommendation=RecommendationDetailResponse.model_validate(recommendation)
    )


@router.patch("/{recommendation_id}", response_model=RecommendationEnvelope)
async def update_recommendation(
    recommendation_id: str,
    update_data: RecommendationUpdate,
    version: Optional[int] = Depends(expected_version),
    current_user: User = Depends(require_permission("recommendations:write")),
    db: AsyncSession = Depends(get_db)
):
    """Частичное обновление рекомендации"""
    record_id = parse_id(recommendation_id)
    recommendation_service = RecommendationService(db)

    try:
        recommendation = await recommendation_service.update_recommendation(record_id, update_data, version)
    except RecordNotFoundError:
        raise not_found()
    except EditConflictError:
        raise edit_conflict()

    return RecommendationEnvelope(recommendation=RecommendationResponse.model_validate(recommendation))


@router.delete("/{recommendation_id}", response_model=MessageResponse)
async def delete_recommendation(
    recommendation_id: str,
    current_user: User = Depends(require_permission("recommendations:write")),
    db: AsyncSession = Depends(get_db)
):
    """Удаление рекомендации"""
    record_id = parse_id(recommendation_id)
    recommendation_service = RecommendationService(db)

    try:
        await recommendation_service.delete_recommendation(record_id)
    except RecordNotFoundError:
        raise not_found()

    return MessageResponse(message="recommendation successfully deleted")
