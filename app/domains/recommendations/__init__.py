from app.domains.recommendations.entities import Recommendation
from app.domains.recommendations.schemas import (
    RecommendationCreate, RecommendationUpdate, RecommendationResponse,
    RecommendationDetailResponse, RecommendationEnvelope, RecommendationDetailEnvelope,
    RecommendationListResponse
)

__all__ = [
    "Recommendation",
    "RecommendationCreate", "RecommendationUpdate", "RecommendationResponse",
    "RecommendationDetailResponse", "RecommendationEnvelope", "RecommendationDetailEnvelope",
    "RecommendationListResponse"
]
