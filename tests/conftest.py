# tests/conftest.py
import os

# Настройки читаются при импорте app.core.config, поэтому задаем их заранее
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./tunecast-test.db")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.core.db import build_engine, get_db, init_models
from app.core.security import create_access_token
from app.db.repositories import PermissionRepository, UserRepository
from app.domains.identity.entities import User
from app.main import app

ALL_PERMISSIONS = (
    "recommendations:read",
    "recommendations:write",
    "comments:write",
    "reservations:read",
    "reservations:write",
)


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


async def create_user(session, username: str, *codes: str, activated: bool = True) -> User:
    user = User(
        id=0,
        name=username.capitalize(),
        username=username,
        email=f"{username}@example.com",
        activated=activated,
    )
    await UserRepository(session).insert(user)
    await PermissionRepository(session).add_for_user(user.id, *codes)
    return user


@pytest.fixture
async def alice(session):
    return await create_user(session, "alice", *ALL_PERMISSIONS)


@pytest.fixture
async def bob(session):
    # Только чтение рекомендаций
    return await create_user(session, "bob", "recommendations:read")


@pytest.fixture
async def carol(session):
    return await create_user(session, "carol", *ALL_PERMISSIONS, activated=False)


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def alice_headers(alice):
    return bearer(alice)


@pytest.fixture
def bob_headers(bob):
    return bearer(bob)


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    async def factory(username: str, *codes: str, activated: bool = True) -> User:
        return await create_user(session, username, *codes, activated=activated)

    return factory


@pytest.fixture
def carol_headers(carol):
    return bearer(carol)
