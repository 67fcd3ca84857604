from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from app.core.config import settings

ACCESS_TOKEN_TTL = timedelta(minutes=15)


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Выпуск JWT для пользователя; нужен тестам и служебным скриптам"""
    claims = {
        "sub": str(user_id),
        "exp": datetime.now(timezone.utc) + (expires_delta or ACCESS_TOKEN_TTL),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def token_subject(token: str) -> Optional[int]:
    """id пользователя из токена или None, если токен невалиден или просрочен"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        return None
