from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.db.base import Base


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Создание асинхронного движка с настройками пула"""
    options = {"future": True, "echo": echo}

    # SQLite (тесты) использует собственный пул без параметров размера
    if not database_url.startswith("sqlite"):
        options.update(
            pool_size=settings.db_max_idle_conns,
            max_overflow=max(settings.db_max_open_conns - settings.db_max_idle_conns, 0),
            pool_recycle=settings.db_max_idle_time,
            pool_pre_ping=True,
        )

    engine = create_async_engine(database_url, **options)

    if database_url.startswith("sqlite"):
        # Внешние ключи в SQLite выключены по умолчанию, а на них держатся CASCADE и SET NULL
        @event.listens_for(engine.sync_engine, "connect")
        def enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


# Асинхронный движок
engine = build_engine(settings.database_url, echo=settings.db_echo)

# Сессии
SessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        yield session


async def init_models(bind: AsyncEngine = engine) -> None:
    """Создание таблиц по метаданным моделей"""
    import app.db.models  # noqa: F401  регистрирует модели в Base.metadata

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
