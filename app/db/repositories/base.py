"""Базовые репозитории.

``BoundedRepository`` оборачивает каждый запрос в таймаут и переводит ошибки
SQLAlchemy в ``StoreError``. ``VersionedRepository`` реализует общий CRUD для
сущностей с полем ``version``: оптимистичная блокировка через условный
UPDATE и постраничная выборка с оконным подсчетом.
"""
import asyncio
import logging
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar

from sqlalchemy import String, delete, func, insert, literal, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.base import valid_record_id
from app.db.errors import (
    EditConflictError, RecordNotFoundError, StoreError, StoreTimeoutError, UnsafeSortError
)
from app.db.filters import Filters, Metadata, calculate_metadata
from app.db.models.user import User as UserModel
from app.db.predicates import unless_unset
from app.domains.identity.entities import User

logger = logging.getLogger(__name__)

T = TypeVar("T")

users = UserModel.__table__


class BoundedRepository:
    """Репозиторий с ограничением времени на каждую операцию"""

    def __init__(self, session: AsyncSession, timeout: Optional[float] = None):
        self.session = session
        self.timeout = settings.query_timeout if timeout is None else timeout

    async def _execute(self, statement):
        return await self._bounded(self.session.execute(statement), "execute")

    async def _commit(self) -> None:
        await self._bounded(self.session.commit(), "commit")

    async def _bounded(self, awaitable, action: str):
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            logger.warning(f"Database {action} exceeded {self.timeout}s, rolling back")
            await self._rollback()
            raise StoreTimeoutError(f"database {action} timed out") from exc
        except SQLAlchemyError as exc:
            logger.error(f"Database {action} failed: {exc}")
            await self._rollback()
            raise StoreError(f"database {action} failed") from exc

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except SQLAlchemyError as exc:
            logger.error(f"Rollback failed: {exc}")


class VersionedRepository(BoundedRepository, Generic[T]):
    """Общий CRUD для сущностей с оптимистичной блокировкой.

    Наследники задают ORM-модель, список записываемых полей, карту колонок
    сортировки и преобразование строки в доменную сущность.
    """

    model = None
    fields: Tuple[str, ...] = ()
    # Поля, которые нельзя менять после создания (например, родитель)
    immutable_fields: Tuple[str, ...] = ()
    sort_columns: Dict[str, Any] = {}

    @property
    def table(self):
        return self.model.__table__

    @property
    def update_fields(self) -> Tuple[str, ...]:
        return tuple(name for name in self.fields if name not in self.immutable_fields)

    def _select(self, *extra):
        t = self.table
        return (
            select(
                *extra,
                t.c.id,
                t.c.created_at,
                t.c.user_id,
                t.c.version,
                *(t.c[name] for name in self.fields),
                users.c.name.label("owner_name"),
                users.c.username.label("owner_username"),
            )
            .select_from(t)
            .join(users, t.c.user_id == users.c.id)
        )

    def _to_domain(self, data: Mapping[str, Any]) -> T:
        raise NotImplementedError

    def _owner(self, data: Mapping[str, Any]) -> User:
        return User(id=data["user_id"], name=data["owner_name"], username=data["owner_username"])

    def _owned_by(self, username: str):
        """Фильтр по имени пользователя-владельца без учета регистра"""
        return unless_unset(
            func.lower(users.c.username) == func.lower(literal(username, String)),
            username,
            String,
            unset="",
        )

    async def insert(self, entity: T) -> T:
        """Создание записи; id, created_at и version назначает БД"""
        t = self.table
        values = {name: getattr(entity, name) for name in self.fields}
        stmt = (
            insert(t)
            .values(user_id=entity.user_id, **values)
            .returning(t.c.id, t.c.created_at, t.c.version)
        )

        result = await self._execute(stmt)
        row = result.one()
        await self._commit()

        entity.id, entity.created_at, entity.version = row.id, row.created_at, row.version
        return entity

    async def get(self, record_id: int) -> T:
        """Получение записи вместе с владельцем"""
        if not valid_record_id(record_id):
            raise RecordNotFoundError()

        result = await self._execute(self._select().where(self.table.c.id == record_id))
        row = result.one_or_none()
        if row is None:
            raise RecordNotFoundError()
        return self._to_domain(row._mapping)

    async def update(self, entity: T) -> T:
        """Условное обновление: проходит только при совпадении версии"""
        t = self.table
        values = {name: getattr(entity, name) for name in self.update_fields}
        stmt = (
            update(t)
            .where(t.c.id == entity.id, t.c.version == entity.version)
            .values(version=t.c.version + 1, **values)
            .returning(t.c.version)
        )

        result = await self._execute(stmt)
        new_version = result.scalar_one_or_none()
        await self._commit()

        if new_version is None:
            logger.info(f"Edit conflict on {t.name} id={entity.id} version={entity.version}")
            raise EditConflictError()

        entity.version = new_version
        return entity

    async def delete(self, record_id: int) -> None:
        """Удаление записи; повторное удаление дает RecordNotFoundError"""
        if not valid_record_id(record_id):
            raise RecordNotFoundError()

        result = await self._execute(delete(self.table).where(self.table.c.id == record_id))
        await self._commit()

        if result.rowcount == 0:
            raise RecordNotFoundError()

    def _order_by(self, filters: Filters):
        name = filters.sort_column()
        if name not in self.sort_columns:
            raise UnsafeSortError(f"unsafe sort parameter: {filters.sort}")

        column = self.sort_columns[name]
        return column.desc() if filters.sort_direction() == "DESC" else column.asc()

    async def _paginate(self, filters: Filters, predicates: Sequence) -> Tuple[List[T], Metadata]:
        """Одна выборка: фильтры, оконный подсчет, сортировка и LIMIT/OFFSET"""
        stmt = (
            self._select(func.count().over().label("total_records"))
            .where(*predicates)
            .order_by(self._order_by(filters), self.table.c.id.desc())
            .limit(filters.limit())
            .offset(filters.offset())
        )

        result = await self._execute(stmt)
        rows = result.all()

        total_records = rows[0].total_records if rows else 0
        records = [self._to_domain(row._mapping) for row in rows]
        return records, calculate_metadata(total_records, filters.page, filters.page_size)
