from pydantic import BaseModel, ConfigDict
from typing import List
from datetime import datetime

from app.domains.schemas import MetadataResponse, UserSummary


class CommentCreate(BaseModel):
    """Схема для создания комментария"""
    recommendation_id: int = 0
    content: str = ""


class CommentUpdate(BaseModel):
    """Схема для обновления комментария; применяются только переданные поля"""
    content: str = ""


class CommentResponse(BaseModel):
    """Схема для ответа с данными комментария"""
    id: int
    created_at: datetime
    recommendation_id: int
    created_by: UserSummary
    content: str
    version: int

    model_config = ConfigDict(from_attributes=True)


class CommentEnvelope(BaseModel):
    comment: CommentResponse


class CommentListResponse(BaseModel):
    """Схема для списка комментариев"""
    comments: List[CommentResponse]
    metadata: MetadataResponse
