import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db import get_db
from app.core.security import token_subject
from app.db.errors import RecordNotFoundError
from app.db.repositories.permission_repository import PermissionRepository
from app.db.repositories.user_repository import UserRepository
from app.domains.identity.entities import Permissions, User

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Зависимость для получения текущего пользователя по Bearer-токену"""
    if credentials is None:
        raise _unauthorized("you must be authenticated to access this resource")

    user_id = token_subject(credentials.credentials)
    if user_id is None:
        raise _unauthorized("invalid or missing authentication token")

    try:
        user = await UserRepository(db).get(user_id)
    except RecordNotFoundError:
        raise _unauthorized("invalid or missing authentication token")

    return user


async def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Зависимость для получения активированного пользователя"""
    if not current_user.activated:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="your user account must be activated to access this resource"
        )
    return current_user


async def get_current_permissions(
    current_user: User = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
) -> Permissions:
    return await PermissionRepository(db).get_all_for_user(current_user.id)


def require_permission(code: str):
    """Фабрика зависимостей: пользователь должен иметь разрешение ``code``"""

    async def dependency(
        current_user: User = Depends(get_current_active_user),
        permissions: Permissions = Depends(get_current_permissions)
    ) -> User:
        if not permissions.include(code):
            logger.info(f"User {current_user.username} lacks permission {code}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="your user account doesn't have the necessary permissions to access this resource"
            )
        return current_user

    return dependency
