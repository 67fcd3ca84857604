from app.api.http.health import router as health_router
from app.api.http.recommendations import router as recommendations_router
from app.api.http.reservations import router as reservations_router
from app.api.http.comments import router as comments_router
from app.api.http.users import router as users_router

__all__ = [
    "health_router",
    "recommendations_router",
    "reservations_router",
    "comments_router",
    "users_router"
]
