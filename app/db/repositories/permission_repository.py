from sqlalchemy import insert, select

from app.db.models.user import Permission as PermissionModel, users_permissions
from app.db.repositories.base import BoundedRepository
from app.domains.identity.entities import Permissions

permissions = PermissionModel.__table__


class PermissionRepository(BoundedRepository):
    """Репозиторий кодов разрешений"""

    async def get_all_for_user(self, user_id: int) -> Permissions:
        """Получение всех кодов разрешений пользователя"""
        result = await self._execute(
            select(permissions.c.code)
            .select_from(permissions)
            .join(users_permissions, users_permissions.c.permission_id == permissions.c.id)
            .where(users_permissions.c.user_id == user_id)
            .order_by(permissions.c.code)
        )
        return Permissions(result.scalars().all())

    async def add_for_user(self, user_id: int, *codes: str) -> None:
        """Выдача пользователю разрешений по кодам"""
        if not codes:
            return

        await self._ensure_codes(codes)
        result = await self._execute(select(permissions.c.id).where(permissions.c.code.in_(codes)))
        wanted = set(result.scalars().all())

        result = await self._execute(
            select(users_permissions.c.permission_id).where(users_permissions.c.user_id == user_id)
        )
        granted = set(result.scalars().all())

        rows = [{"user_id": user_id, "permission_id": permission_id} for permission_id in sorted(wanted - granted)]
        if rows:
            await self._execute(insert(users_permissions).values(rows))
        await self._commit()

    async def _ensure_codes(self, codes) -> None:
        result = await self._execute(select(permissions.c.code).where(permissions.c.code.in_(codes)))
        missing = set(codes) - set(result.scalars().all())
        if missing:
            await self._execute(insert(permissions).values([{"code": code} for code in sorted(missing)]))
