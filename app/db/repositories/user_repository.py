from typing import Any, Mapping, Optional

from sqlalchemy import insert, select

from app.db.base import valid_record_id
from app.db.errors import RecordNotFoundError
from app.db.models.user import User as UserModel
from app.db.repositories.base import BoundedRepository
from app.domains.identity.entities import User

users = UserModel.__table__


class UserRepository(BoundedRepository):
    """Репозиторий для работы с пользователями"""

    async def insert(self, user: User) -> User:
        """Создание нового пользователя"""
        stmt = (
            insert(users)
            .values(name=user.name, username=user.username, email=user.email, activated=user.activated)
            .returning(users.c.id, users.c.created_at, users.c.version)
        )

        result = await self._execute(stmt)
        row = result.one()
        await self._commit()

        user.id, user.created_at, user.version = row.id, row.created_at, row.version
        return user

    async def get(self, user_id: int) -> User:
        """Получение пользователя по id"""
        if not valid_record_id(user_id):
            raise RecordNotFoundError()
        return await self._get_one(users.c.id == user_id)

    async def get_by_username(self, username: str) -> User:
        """Получение пользователя по username"""
        return await self._get_one(users.c.username == username)

    async def _get_one(self, condition) -> User:
        result = await self._execute(select(users).where(condition))
        row = result.one_or_none()
        if row is None:
            raise RecordNotFoundError()
        return self._to_domain(row._mapping)

    def _to_domain(self, data: Mapping[str, Any]) -> User:
        """Преобразование строки БД в доменную сущность"""
        return User(
            id=data["id"],
            name=data["name"],
            username=data["username"],
            email=data["email"],
            activated=data["activated"],
            created_at=data["created_at"],
            version=data["version"]
        )
