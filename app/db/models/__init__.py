from app.db.models.user import User, Permission, users_permissions
from app.db.models.recommendation import Recommendation
from app.db.models.reservation import Reservation
from app.db.models.comment import Comment

__all__ = [
    "User",
    "Permission",
    "users_permissions",
    "Recommendation",
    "Reservation",
    "Comment"
]
