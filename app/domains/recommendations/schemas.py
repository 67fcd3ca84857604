from pydantic import BaseModel, ConfigDict
from typing import Optional, List
from datetime import datetime

from app.domains.comments.schemas import CommentResponse
from app.domains.schemas import MetadataResponse, UserSummary


class RecommendationCreate(BaseModel):
    """Схема для создания рекомендации"""
    artist: str = ""
    title: str = ""
    cover_url: Optional[str] = None
    yt_link: Optional[str] = None
    spotify_link: Optional[str] = None
    comment: Optional[str] = None
    is_public: bool = False


class RecommendationUpdate(BaseModel):
    """Схема для обновления рекомендации.

    Применяются только поля, присутствующие в запросе (``model_fields_set``),
    поэтому явный null у необязательного поля очищает его, а отсутствие
    поля оставляет значение как есть.
    """
    artist: str = ""
    title: str = ""
    cover_url: Optional[str] = None
    yt_link: Optional[str] = None
    spotify_link: Optional[str] = None
    comment: Optional[str] = None
    is_public: bool = False

    def changes(self) -> dict:
        return {name: getattr(self, name) for name in self.model_fields_set}


class RecommendationResponse(BaseModel):
    """Схема для ответа с данными рекомендации"""
    id: int
    created_at: datetime
    created_by: UserSummary
    artist: str
    title: str
    cover_url: Optional[str] = None
    yt_link: Optional[str] = None
    spotify_link: Optional[str] = None
    comment: Optional[str] = None
    is_public: bool
    version: int

    model_config = ConfigDict(from_attributes=True)


class RecommendationDetailResponse(RecommendationResponse):
    """Рекомендация вместе с комментариями"""
    comments: List[CommentResponse] = []


class RecommendationEnvelope(BaseModel):
    recommendation: RecommendationResponse


class RecommendationDetailEnvelope(BaseModel):
    recommendation: RecommendationDetailResponse


class RecommendationListResponse(BaseModel):
    """Схема для списка рекомендаций"""
    recommendations: List[RecommendationResponse]
    metadata: MetadataResponse
