from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http.params import edit_conflict, expected_version, filters_dependency, not_found, parse_id
from app.core.auth import get_current_active_user, require_permission
from app.core.db import get_db
from app.db.errors import EditConflictError, RecordNotFoundError
from app.db.filters import Filters
from app.domains.comments.schemas import (
    CommentCreate, CommentUpdate, CommentResponse, CommentEnvelope, CommentListResponse
)
from app.domains.comments.services import SORT_SAFELIST, CommentService
from app.domains.identity.entities import User
from app.domains.schemas import MessageResponse, MetadataResponse

router = APIRouter(prefix="/v1/comments", tags=["comments"])


@router.get("", response_model=CommentListResponse)
async def list_comments(
    filters: Filters = Depends(filters_dependency(SORT_SAFELIST)),
    recommendation_id: int = Query(0),
    created_by: str = Query(""),
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Список комментариев, при необходимости к одной рекомендации"""
    comment_service = CommentService(db)
    comments, metadata = await comment_service.list_comments(
        filters,
        recommendation_id=recommendation_id,
        created_by=created_by
    )

    return CommentListResponse(
        comments=[CommentResponse.model_validate(c) for c in comments],
        metadata=MetadataResponse.model_validate(metadata)
    )


@router.post("", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    response: Response,
    current_user: User = Depends(require_permission("comments:write")),
    db: AsyncSession = Depends(get_db)
):
    """Создание комментария к рекомендации"""
    comment_service = CommentService(db)
    comment = await comment_service.create_comment(comment_data, current_user)

    response.headers["Location"] = f"/v1/comments/{comment.id}"
    return CommentEnvelope(comment=CommentResponse.model_validate(comment))


@router.patch("/{comment_id}", response_model=CommentEnvelope)
async def update_comment(
    comment_id: str,
    update_data: CommentUpdate,
    version: Optional[int] = Depends(expected_version),
    current_user: User = Depends(require_permission("comments:write")),
    db: AsyncSession = Depends(get_db)
):
    record_id = parse_id(comment_id)
    comment_service = CommentService(db)

    try:
        comment = await comment_service.update_comment(record_id, update_data, version)
    except RecordNotFoundError:
        raise not_found()
    except EditConflictError:
        raise edit_conflict()

    return CommentEnvelope(comment=CommentResponse.model_validate(comment))


@router.delete("/{comment_id}", response_model=MessageResponse)
async def delete_comment(
    comment_id: str,
    current_user: User = Depends(require_permission("comments:write")),
    db: AsyncSession = Depends(get_db)
):
    record_id = parse_id(comment_id)
    comment_service = CommentService(db)

    try:
        await comment_service.delete_comment(record_id)
    except RecordNotFoundError:
        raise not_found()

    return MessageResponse(message="comment successfully deleted")
