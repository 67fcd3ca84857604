from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.http.params import not_found
from app.core.auth import get_current_active_user
from app.core.db import get_db
from app.db.errors import RecordNotFoundError
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import User
from app.domains.schemas import UserEnvelope, UserSummary

router = APIRouter(prefix="/v1/users", tags=["users"])


@router.get("/{username}", response_model=UserEnvelope)
async def get_user(
    username: str,
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Публичные данные пользователя по username"""
    try:
        user = await UserRepository(db).get_by_username(username)
    except RecordNotFoundError:
        raise not_found()

    return UserEnvelope(user=UserSummary.model_validate(user))
