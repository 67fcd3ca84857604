from app.db.repositories.user_repository import UserRepository
from app.db.repositories.permission_repository import PermissionRepository
from app.db.repositories.recommendation_repository import RecommendationRepository
from app.db.repositories.reservation_repository import ReservationRepository
from app.db.repositories.comment_repository import CommentRepository

__all__ = [
    "UserRepository",
    "PermissionRepository",
    "RecommendationRepository",
    "ReservationRepository",
    "CommentRepository"
]
